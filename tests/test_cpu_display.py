"""
Clear screen and sprite drawing tests
"""
from conftest import execute
from chip8.framebuffer import HEIGHT, PIXEL_ON, WIDTH


def set_sprite(cpu, address, rows):
    cpu.i = address
    for k, row in enumerate(rows):
        cpu.memory.write_byte(address + k, row)


def lit_cells(framebuffer):
    rows = framebuffer.rows()
    return {(x, y) for y in range(HEIGHT) for x in range(WIDTH) if rows[y, x]}


def test_draw_sets_cells_msb_first(cpu):
    set_sprite(cpu, 0x300, [0b10000001])
    cpu.v[0] = 10
    cpu.v[1] = 5
    execute(cpu, 0xD011)
    assert lit_cells(cpu.framebuffer) == {(10, 5), (17, 5)}
    assert cpu.framebuffer.pixels[5 * WIDTH + 10] == PIXEL_ON
    assert cpu.v[0xF] == 0
    assert cpu.framebuffer.dirty


def test_draw_twice_restores_and_reports_collision(cpu):
    set_sprite(cpu, 0x300, [0xF0, 0x90, 0xF0])
    cpu.v[0] = 3
    cpu.v[1] = 4

    execute(cpu, 0xD013)
    assert cpu.v[0xF] == 0
    assert len(lit_cells(cpu.framebuffer)) == 10

    execute(cpu, 0xD013)
    assert cpu.v[0xF] == 1
    assert lit_cells(cpu.framebuffer) == set()


def test_draw_without_overlap_clears_vf(cpu):
    set_sprite(cpu, 0x300, [0x80])
    cpu.v[0xF] = 1
    execute(cpu, 0xD001)
    assert cpu.v[0xF] == 0


def test_draw_font_glyph(cpu):
    cpu.v[2] = 0x0
    execute(cpu, 0xF229)
    execute(cpu, 0xD335)
    # "0" glyph: top row 1111, middle rows 1001
    assert {(x, 0) for x in range(4)} <= lit_cells(cpu.framebuffer)
    assert (1, 1) not in lit_cells(cpu.framebuffer)


def test_origin_wraps(cpu):
    set_sprite(cpu, 0x300, [0x80])
    cpu.v[0] = 64 + 3
    cpu.v[1] = 32 + 2
    execute(cpu, 0xD011)
    assert lit_cells(cpu.framebuffer) == {(3, 2)}


def test_columns_past_right_edge_are_clipped(cpu):
    set_sprite(cpu, 0x300, [0xFF])
    cpu.v[0] = 62
    cpu.v[1] = 0
    execute(cpu, 0xD011)
    assert lit_cells(cpu.framebuffer) == {(62, 0), (63, 0)}


def test_rows_past_bottom_edge_are_clipped(cpu):
    set_sprite(cpu, 0x300, [0x80] * 5)
    cpu.v[0] = 0
    cpu.v[1] = 30
    execute(cpu, 0xD015)
    assert lit_cells(cpu.framebuffer) == {(0, 30), (0, 31)}


def test_clipped_pixels_do_not_collide(cpu):
    cpu.framebuffer.pixels[0] = PIXEL_ON
    set_sprite(cpu, 0x300, [0x01])
    cpu.v[0] = 63
    cpu.v[1] = 0
    execute(cpu, 0xD011)
    assert cpu.v[0xF] == 0
    assert lit_cells(cpu.framebuffer) == {(0, 0)}


def test_sprite_read_wraps_past_end_of_memory(cpu):
    cpu.i = 0xFFF
    cpu.memory.write_byte(0xFFF, 0x80)
    cpu.memory.write_byte(0x000, 0x40)
    execute(cpu, 0xD002)
    assert lit_cells(cpu.framebuffer) == {(0, 0), (1, 1)}


def test_draw_with_vf_as_coordinate(cpu):
    set_sprite(cpu, 0x300, [0x80])
    cpu.v[0xF] = 7
    cpu.v[1] = 1
    execute(cpu, 0xDF11)
    assert lit_cells(cpu.framebuffer) == {(7, 1)}


def test_clear_screen(cpu):
    set_sprite(cpu, 0x300, [0xFF])
    execute(cpu, 0xD001)
    cpu.framebuffer.dirty = False
    execute(cpu, 0x00E0)
    assert lit_cells(cpu.framebuffer) == set()
    assert cpu.framebuffer.dirty
