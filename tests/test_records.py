from __future__ import annotations

import unittest

from nyaaview.errors import DecodeError, OutOfRangeError
from nyaaview.records import ResultRecord, ResultSet, decode_records, parse_unsigned


def _record(record_id: str, name: str = "Show") -> ResultRecord:
    return ResultRecord(id=record_id, name=name)


class ResultRecordTests(unittest.TestCase):
    def test_from_payload_reads_all_api_fields(self) -> None:
        record = ResultRecord.from_payload(
            {
                "id": "1612345",
                "name": "[Group] Show - 01 [1080p].mkv",
                "hash": "abc",
                "date": "2022-05-01 12:00",
                "filesize": "1.4 GiB",
                "category": "Anime",
                "sub_category": "English-translated",
                "magnet": "magnet:?xt=urn:btih:abc",
                "torrent": "https://nyaa.si/download/1612345.torrent",
                "seeders": "120",
                "leechers": "4",
                "completed": "900",
                "status": "trusted",
            }
        )
        self.assertEqual(record.id, "1612345")
        self.assertEqual(record.filesize, "1.4 GiB")
        self.assertEqual(record.magnet, "magnet:?xt=urn:btih:abc")
        self.assertEqual(record.torrent, "https://nyaa.si/download/1612345.torrent")
        self.assertEqual(record.seeders, "120")
        self.assertEqual(record.status, "trusted")

    def test_from_payload_fills_missing_fields_and_stringifies_scalars(self) -> None:
        record = ResultRecord.from_payload({"id": 42, "name": "x", "seeders": 7, "leechers": None})
        self.assertEqual(record.id, "42")
        self.assertEqual(record.seeders, "7")
        self.assertEqual(record.leechers, "")
        self.assertEqual(record.magnet, "")

    def test_from_payload_rejects_non_objects(self) -> None:
        with self.assertRaises(DecodeError):
            ResultRecord.from_payload(["not", "an", "object"])

    def test_numeric_id_defaults_to_zero(self) -> None:
        self.assertEqual(_record("42").numeric_id(), 42)
        self.assertEqual(_record(" 42\n").numeric_id(), 42)
        self.assertEqual(_record("abc").numeric_id(), 0)
        self.assertEqual(_record("-3").numeric_id(), 0)
        self.assertEqual(_record("").numeric_id(), 0)

    def test_viewed_iff_id_at_or_below_watermark(self) -> None:
        record = _record("42")
        self.assertTrue(record.is_viewed(42))
        self.assertTrue(record.is_viewed(100))
        self.assertFalse(record.is_viewed(41))


class ResultSetTests(unittest.TestCase):
    def test_get_raises_out_of_range_on_empty_set(self) -> None:
        with self.assertRaises(OutOfRangeError):
            ResultSet().get(0)

    def test_get_raises_out_of_range_past_end_and_for_negative_index(self) -> None:
        results = ResultSet([_record("1"), _record("2")])
        with self.assertRaises(OutOfRangeError):
            results.get(2)
        with self.assertRaises(OutOfRangeError):
            results.get(-1)

    def test_out_of_range_is_an_index_error(self) -> None:
        with self.assertRaises(IndexError):
            ResultSet().get(3)

    def test_replace_overwrites_wholesale(self) -> None:
        results = ResultSet([_record("1"), _record("2"), _record("3")])
        results.replace([_record("9")])
        self.assertEqual(len(results), 1)
        self.assertEqual(results.get(0).id, "9")
        self.assertEqual(results.last_index(), 0)

    def test_empty_set_is_falsey_and_has_no_last_index(self) -> None:
        results = ResultSet()
        self.assertFalse(results)
        self.assertIsNone(results.last_index())
        self.assertEqual(list(results), [])


class DecodeRecordsTests(unittest.TestCase):
    def test_decodes_list_in_order(self) -> None:
        records = decode_records([{"id": "3", "name": "c"}, {"id": "1", "name": "a"}])
        self.assertEqual([record.id for record in records], ["3", "1"])

    def test_rejects_non_list_body(self) -> None:
        with self.assertRaises(DecodeError):
            decode_records({"error": "rate limited"})

    def test_parse_unsigned(self) -> None:
        self.assertEqual(parse_unsigned("0012"), 12)
        self.assertEqual(parse_unsigned("1.5", default=7), 7)
        self.assertEqual(parse_unsigned("²"), 0)


if __name__ == "__main__":
    unittest.main()
