"""
Unit tests for group validation.

Contract:
- bad shape -> code 1, no request
- listed group -> (0, None) after exactly one request
- unlisted group -> code 2
- listing fetch failure -> code 10
"""

import unittest

from maischedule.errors import FetchError, GroupNotFoundError, GroupShapeError
from maischedule.validate import check_group_shape, ensure_group, validate_group
from tests.helpers import CONFIG, GROUP, StubFetcher, listing_html


class TestGroupShape(unittest.TestCase):
    def test_valid_shapes(self) -> None:
        for group in ["М8О-406Б-19", "M8O-406B-19", "М3О-1 БК-22", "Т6О-101А-21"]:
            with self.subTest(group=group):
                check_group_shape(group)

    def test_invalid_shapes(self) -> None:
        for group in ["", "М8О406Б19", "М8О-4060Б-19", "М8О-406Б-", "406Б-19", "М8О-406ABCD-19"]:
            with self.subTest(group=group):
                with self.assertRaises(GroupShapeError):
                    check_group_shape(group)

    def test_non_ascii_digits_and_numeric_letters(self) -> None:
        # Arabic-Indic digits and the Roman numeral letter are not part of a group code
        for group in ["М8О-٤٠٦Б-19", "М8О-406Б-١٩", "М8О-406Ⅻ-19", "М8О-４０６Б-19"]:
            with self.subTest(group=group):
                with self.assertRaises(GroupShapeError):
                    check_group_shape(group)

    def test_bad_shape_makes_no_request(self) -> None:
        fetcher = StubFetcher({CONFIG.listing_url(): listing_html([GROUP])})
        code, err = validate_group("not-a-group", fetcher, CONFIG)
        self.assertEqual(code, 1)
        self.assertIsInstance(err, GroupShapeError)
        self.assertEqual(fetcher.calls, [])


class TestGroupListing(unittest.TestCase):
    def setUp(self) -> None:
        self.fetcher = StubFetcher(
            {CONFIG.listing_url(): listing_html(["М8О-405Б-19", GROUP, "М8О-407Б-19"])}
        )

    def test_listed_group(self) -> None:
        code, err = validate_group(GROUP, self.fetcher, CONFIG)
        self.assertEqual(code, 0)
        self.assertIsNone(err)
        self.assertEqual(self.fetcher.calls, [(CONFIG.listing_url(), {})])

    def test_unlisted_group(self) -> None:
        code, err = validate_group("М8О-101Б-22", self.fetcher, CONFIG)
        self.assertEqual(code, 2)
        self.assertIsInstance(err, GroupNotFoundError)
        self.assertEqual(len(self.fetcher.calls), 1)

    def test_ensure_group_raises(self) -> None:
        with self.assertRaises(GroupNotFoundError) as ctx:
            ensure_group("М8О-101Б-22", self.fetcher, CONFIG)
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("М8О-101Б-22", str(ctx.exception))

    def test_listing_fetch_failure(self) -> None:
        fetcher = StubFetcher({})
        code, err = validate_group(GROUP, fetcher, CONFIG)
        self.assertEqual(code, 10)
        self.assertIsInstance(err, FetchError)

    def test_groups_outside_content_region_are_ignored(self) -> None:
        html = f'<html><body><a class="sc-group-item">{GROUP}</a><div id="schedule-content"></div></body></html>'
        fetcher = StubFetcher({CONFIG.listing_url(): html})
        code, _ = validate_group(GROUP, fetcher, CONFIG)
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
