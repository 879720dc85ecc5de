from fundintake.extraction.text import (
    collapse_whitespace,
    find_block,
    find_labeled,
    iter_labeled,
    normalize_text,
    slugify,
    title_case,
)


class TestNormalizeText:
    def test_unifies_newlines_and_trims_lines(self) -> None:
        assert normalize_text("  a:\t1 \r\nb:  2\r") == "a: 1\nb: 2"

    def test_drops_zero_width_characters(self) -> None:
        assert normalize_text("Round\u200b Size") == "Round Size"

    def test_non_breaking_space_becomes_space(self) -> None:
        assert normalize_text("Investment\u00a0Amount") == "Investment Amount"


class TestFindLabeled:
    def test_value_on_same_line(self) -> None:
        assert find_labeled("Round Size: $2M", ["Round Size"]) == "$2M"

    def test_value_on_next_line(self) -> None:
        assert find_labeled("Round Size\n$2M", ["Round Size"]) == "$2M"

    def test_tolerates_hyphen_and_spacing_in_label(self) -> None:
        assert find_labeled("Pro rata rights: Yes", ["Pro-rata rights"]) == "Yes"

    def test_is_case_insensitive(self) -> None:
        assert find_labeled("INSTRUMENT - Equity", ["Instrument"]) == "Equity"

    def test_does_not_match_longer_word(self) -> None:
        assert find_labeled("Instrumentation: lasers", ["Instrument"]) is None

    def test_mid_line_label_needs_colon(self) -> None:
        assert find_labeled("Repeat founders with grit", ["Founders"]) is None
        assert find_labeled("Team. Founders: Jane Doe", ["Founders"]) == "Jane Doe"

    def test_missing_label(self) -> None:
        assert find_labeled("nothing here", ["Round Size"]) is None

    def test_iter_labeled_yields_in_document_order(self) -> None:
        text = "Amount: TBD\nAmount: $5,000"
        assert list(iter_labeled(text, ["Amount"])) == ["TBD", "$5,000"]


class TestFindBlock:
    def test_block_ends_at_blank_line(self) -> None:
        text = "Reason for Investing:\nStrong team.\nBig market.\n\nOther"
        assert find_block(text, ["Reason for Investing"]) == "Strong team.\nBig market."

    def test_block_ends_at_stop_label(self) -> None:
        text = "Reason for Investing: Strong team.\nNotable Co-Investors: Foo Capital"
        block = find_block(text, ["Reason for Investing"], ["Notable Co-Investors"])
        assert block == "Strong team."

    def test_block_runs_to_end_of_text(self) -> None:
        assert find_block("Description:\nRobots.", ["Description"]) == "Robots."

    def test_missing_block(self) -> None:
        assert find_block("Description:", ["Reason for Investing"]) is None


class TestSmallHelpers:
    def test_collapse_whitespace(self) -> None:
        assert collapse_whitespace(" a \n b\t c ") == "a b c"

    def test_title_case_only_changes_all_caps(self) -> None:
        assert title_case("SAN FRANCISCO") == "San Francisco"
        assert title_case("McAllen") == "McAllen"

    def test_slugify_ascii(self) -> None:
        assert slugify("Acme Robotics, Inc.") == "acme-robotics-inc"

    def test_slugify_transliterates(self) -> None:
        assert slugify("Café Zürich") == "cafe-zurich"
