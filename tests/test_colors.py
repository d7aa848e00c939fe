from deckledger.models.colors import BLACK, BLUE, GREEN, RED, WHITE, Colors


class TestColors:
    def test_empty_is_colorless(self) -> None:
        colors = Colors()
        assert colors.is_colorless
        assert colors.get() == []
        assert colors.symbols == ""

    def test_add_from_cost(self) -> None:
        colors = Colors().add_from_cost(["2", "b", "b"])
        assert colors.get() == [BLACK]
        assert colors.b
        assert not colors.r

    def test_hybrid_and_phyrexian_symbols(self) -> None:
        colors = Colors().add_from_cost(["wu", "gp", "x"])
        assert colors.get() == [WHITE, BLUE, GREEN]

    def test_add_from_array_accepts_codes_and_letters(self) -> None:
        colors = Colors().add_from_array([RED, "u", 9, "Z"])
        assert colors.get() == [BLUE, RED]

    def test_get_is_in_wubrg_order(self) -> None:
        colors = Colors().add_from_array([GREEN, WHITE, RED])
        assert colors.get() == [WHITE, RED, GREEN]
        assert colors.symbols == "WRG"

    def test_multicolor(self) -> None:
        assert Colors().add_from_array([RED, BLUE]).is_multicolor
        assert not Colors().add_from_array([RED]).is_multicolor

    def test_merge_is_order_independent(self) -> None:
        a = Colors().add_from_array([WHITE])
        b = Colors().add_from_array([BLUE, BLACK])
        c = Colors().add_from_array([BLACK, GREEN])

        left = Colors().add_from_color(a).add_from_color(b).add_from_color(c)
        right = Colors().add_from_color(c).add_from_color(a).add_from_color(b)

        assert left == right
        assert left.get() == [WHITE, BLUE, BLACK, GREEN]

    def test_merge_does_not_change_other(self) -> None:
        other = Colors().add_from_array([RED])
        Colors().add_from_array([BLUE]).add_from_color(other)
        assert other.get() == [RED]

    def test_from_list_round_trip(self) -> None:
        colors = Colors.from_list([BLUE, RED])
        assert Colors.from_list(colors.get()) == colors

    def test_superset(self) -> None:
        small = Colors.from_list([RED])
        large = Colors.from_list([RED, BLUE])
        assert large.issuperset(small)
        assert not small.issuperset(large)
