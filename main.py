#!/usr/bin/env python3
"""
CHIP-8 Emulator
A Python interpreter for the CHIP-8 virtual machine.
"""

import sys
import os
import argparse
import logging

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from chip8.emulator import Chip8, DEFAULT_CYCLES_PER_FRAME
from chip8.errors import Chip8Error


def main(argv=None):
    parser = argparse.ArgumentParser(description='CHIP-8 Emulator')
    parser.add_argument('rom_file', help='Path to the CHIP-8 ROM file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging (set CHIP8_TRACE=1 for per-instruction trace)')
    parser.add_argument('--scale', type=int, default=10, help='Window pixels per CHIP-8 pixel')
    parser.add_argument('--cycles-per-frame', type=int, default=DEFAULT_CYCLES_PER_FRAME,
                        help='Instructions executed per 60Hz frame')
    parser.add_argument('--headless', action='store_true', help='Run without a window (requires --max-cycles)')
    parser.add_argument('--max-cycles', type=int, default=None, help='Stop after this many cycles')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the Cxkk random source')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    if args.headless and args.max_cycles is None:
        parser.error('--headless requires --max-cycles')

    try:
        chip8 = Chip8(debug=args.debug, seed=args.seed, cycles_per_frame=args.cycles_per_frame)
        chip8.load_rom(args.rom_file)

        if args.headless:
            cycles = chip8.run_cycles(args.max_cycles)
        else:
            cycles = chip8.run(scale=args.scale, max_cycles=args.max_cycles)
        print(f"Emulation finished after {cycles} cycles.")
    except FileNotFoundError:
        print(f"Error: ROM file '{args.rom_file}' not found.")
        sys.exit(1)
    except Chip8Error as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        import traceback
        print(f"Error: {e}")
        print("Full traceback:")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
