"""
Property-based tests with Hypothesis.

Contact normalization and seat id parsing are pure functions, so they are
checked against generated input instead of hand-picked examples.
"""

from hypothesis import given, settings, strategies as st

from pos_api.services.domain.customer_service import normalize_contact
from pos_api.services.domain.seat_service import header_seat_id, parse_seat_ids


ten_digits = st.text(alphabet="0123456789", min_size=10, max_size=10)
separators = st.sampled_from([" ", "-", ".", "(", ")", "+", "/"])


class TestContactNormalizationProperties:
    @given(raw=st.text(max_size=40))
    @settings(max_examples=200)
    def test_always_ten_digits(self, raw):
        """Property: the result is exactly ten ASCII digits."""
        normalized = normalize_contact(raw)

        assert len(normalized) == 10
        assert all(ch in "0123456789" for ch in normalized)

    @given(raw=st.text(max_size=40))
    def test_idempotent(self, raw):
        """Property: normalizing twice changes nothing."""
        once = normalize_contact(raw)

        assert normalize_contact(once) == once

    @given(number=ten_digits)
    def test_normalized_number_is_unchanged(self, number):
        assert normalize_contact(number) == number

    @given(number=ten_digits, data=st.data())
    def test_formatting_is_ignored(self, number, data):
        """Property: separators between the digits do not affect the result."""
        formatted = "".join(
            digit + data.draw(st.text(alphabet=separators, max_size=2)) for digit in number
        )

        assert normalize_contact(formatted) == number

    @given(number=ten_digits, country=st.text(alphabet="0123456789", min_size=1, max_size=4))
    def test_country_prefix_is_dropped(self, number, country):
        """Property: only the last ten digits are kept."""
        assert normalize_contact(f"+{country} {number}") == number


class TestSeatIdProperties:
    @given(values=st.lists(st.one_of(st.integers(-50, 50), st.text(max_size=4), st.none())))
    def test_only_positive_unique_ids(self, values):
        seat_ids = parse_seat_ids(values)

        assert all(isinstance(seat_id, int) and seat_id > 0 for seat_id in seat_ids)
        assert len(seat_ids) == len(set(seat_ids))

    @given(seat_ids=st.lists(st.integers(1, 500), min_size=1, unique=True))
    def test_valid_ids_survive_in_order(self, seat_ids):
        assert parse_seat_ids(seat_ids) == seat_ids
        assert parse_seat_ids([str(seat_id) for seat_id in seat_ids]) == seat_ids
        assert header_seat_id(seat_ids) == seat_ids[0]
