import pytest

from buttonpress import Machine, parse_line, parse_machines


def test_parse_line_fields():
    m = parse_line("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}")
    assert m.target == 0b0110
    assert m.n_lights == 4
    assert m.n_buttons == 6
    assert m.buttons[1] == frozenset({1, 3})
    assert m.toggle_masks == [0b1000, 0b1010, 0b0100, 0b1100, 0b0101, 0b0011]
    assert m.joltage == (3, 5, 4, 7)


def test_parse_machines_skips_blank_lines(example_text):
    machines = parse_machines("\n" + example_text + "\n\n")
    assert len(machines) == 3
    assert [m.n_counters for m in machines] == [4, 5, 6]


def test_str_round_trips():
    line = "[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}"
    assert str(parse_line(line)) == line


@pytest.mark.parametrize(
    "line",
    [
        "(0,1) {1,2}",
        "[.#] (0,x) {1}",
        "[.#] (0) {1} (1)",
        "[.#] (0) <1>",
    ],
)
def test_malformed_lines_raise(line):
    with pytest.raises(ValueError):
        parse_line(line)


def test_lights_derived_from_highest_index():
    m = Machine.from_masks(0b1, [0b100, 0b10])
    assert m.n_lights == 3


def test_apply_helpers():
    m = Machine(0, [[0, 1], [1]], [2, 5])
    assert m.apply_toggles([1, 1]) == 0b01
    assert m.apply_increments([2, 3]) == (2, 5)


def test_negative_joltage_rejected():
    with pytest.raises(ValueError):
        Machine(0, [[0]], [-1])
