import collections
import io
import unittest
from datetime import datetime, time, timezone, tzinfo

from console_logger.core import kinds


class Plain:
    pass


class TestClassify(unittest.TestCase):
    def test_kind_table(self):
        cases = [
            (io.StringIO(), kinds.RESOURCE),
            (print, kinds.CALLABLE),
            (Plain, kinds.CALLABLE),
            (datetime(2024, 1, 1), kinds.DATETIME),
            (time(9, 30), kinds.DATETIME),
            (b"raw", kinds.STRINGABLE),
            ("text", kinds.SCALAR),
            (None, kinds.SCALAR),
            (False, kinds.SCALAR),
            ({"a": 1}, kinds.MAPPING),
            (collections.OrderedDict(), kinds.MAPPING),
            ([1], kinds.SEQUENCE),
            ((1,), kinds.SEQUENCE),
            (collections.deque([1]), kinds.SEQUENCE),
            ({"a": 1}.keys(), kinds.SEQUENCE),
            (Plain(), kinds.AGGREGATE),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(kinds.classify(value), expected)

    def test_resource_wins_over_iterable(self):
        # file objects are iterable but must never be iterated
        self.assertEqual(kinds.classify(io.BytesIO(b"a\nb")), kinds.RESOURCE)


class TestIdentity(unittest.TestCase):
    def test_aggregates_and_mutable_containers_tracked(self):
        self.assertTrue(kinds.has_identity(Plain(), kinds.AGGREGATE))
        self.assertTrue(kinds.has_identity([], kinds.SEQUENCE))
        self.assertTrue(kinds.has_identity({}, kinds.MAPPING))
        self.assertTrue(kinds.has_identity(set(), kinds.SEQUENCE))

    def test_immutable_containers_not_tracked(self):
        self.assertFalse(kinds.has_identity((1, 2), kinds.SEQUENCE))
        self.assertFalse(kinds.has_identity(frozenset(), kinds.SEQUENCE))
        self.assertFalse(kinds.has_identity(range(3), kinds.SEQUENCE))


class TestZoneName(unittest.TestCase):
    def test_naive(self):
        self.assertIsNone(kinds.zone_name(datetime(2024, 1, 1)))

    def test_utc(self):
        self.assertEqual(kinds.zone_name(datetime(2024, 1, 1, tzinfo=timezone.utc)), "UTC")

    def test_pytz_style_zone_attribute(self):
        class FakeZone(tzinfo):
            zone = "America/New_York"

            def utcoffset(self, dt):
                return None

            def tzname(self, dt):
                return "EST"

            def dst(self, dt):
                return None

        value = datetime(2024, 1, 1, tzinfo=FakeZone())
        self.assertEqual(kinds.zone_name(value), "America/New_York")


class TestPlainScalar(unittest.TestCase):
    def test_int_subclass(self):
        class Count(int):
            pass

        result = kinds.plain_scalar(Count(5))
        self.assertEqual(result, 5)
        self.assertIs(type(result), int)

    def test_exact_types_returned_as_is(self):
        text = "same"
        self.assertIs(kinds.plain_scalar(text), text)


if __name__ == "__main__":
    unittest.main()
