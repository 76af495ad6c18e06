from contract_kit.extraction.confidence import calculate_confidence, resolve_path


class TestResolvePath:
    def test_top_level(self) -> None:
        assert resolve_path({"buyer": "Jane"}, "buyer") == "Jane"

    def test_nested(self) -> None:
        data = {"important_dates": {"closing_date": "2024-03-01"}}

        assert resolve_path(data, "important_dates.closing_date") == "2024-03-01"

    def test_missing_step(self) -> None:
        assert resolve_path({"important_dates": None}, "important_dates.closing_date") is None
        assert resolve_path({}, "a.b.c") is None

    def test_non_mapping_step(self) -> None:
        assert resolve_path({"a": "text"}, "a.b") is None


class TestCalculateConfidence:
    def test_all_fields_present(self) -> None:
        data = {"buyer": "Jane", "seller": "John"}

        assert calculate_confidence(data, ["buyer", "seller"]) == 100

    def test_no_fields_present(self) -> None:
        assert calculate_confidence({}, ["buyer", "seller"]) == 0

    def test_rounds(self) -> None:
        data = {"a": 1, "b": None, "c": None}

        assert calculate_confidence(data, ["a", "b", "c"]) == 33

    def test_empty_string_is_missing(self) -> None:
        assert calculate_confidence({"buyer": ""}, ["buyer"]) == 0

    def test_false_counts_as_present(self) -> None:
        assert calculate_confidence({"flag": False}, ["flag"]) == 100

    def test_nested_paths(self) -> None:
        data = {"important_dates": {"closing_date": "2024-03-01", "offer_date": None}}
        required = ["important_dates.closing_date", "important_dates.offer_date"]

        assert calculate_confidence(data, required) == 50

    def test_no_required_fields(self) -> None:
        assert calculate_confidence({}, []) == 100

    def test_bounded_and_monotonic(self) -> None:
        """Filling in another field never lowers the score."""
        required = ["a", "b", "c", "d"]
        data: dict[str, object] = {}
        previous = calculate_confidence(data, required)
        for field in required:
            data[field] = "value"
            current = calculate_confidence(data, required)
            assert 0 <= current <= 100
            assert current >= previous
            previous = current
        assert previous == 100
