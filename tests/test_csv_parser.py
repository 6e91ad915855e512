"""
Tests for catalog/csv_parser.py

Covers quoting rules, blank-line handling, short rows and loading from disk
or URL.
"""
import csv
import re

import pytest
import responses

from catalog.csv_parser import parse_collection, parse_line, parse_rows, read_collection
from catalog.exceptions import LoadError


class TestParseLine:

    @pytest.mark.unit
    def test_plain_fields_are_trimmed(self):
        assert parse_line(" a , b ,c ") == ['a', 'b', 'c']

    @pytest.mark.unit
    def test_quoted_comma_and_escaped_quote(self):
        assert parse_line('"Rock, ""Prog""",1975') == ['Rock, "Prog"', '1975']

    @pytest.mark.unit
    def test_whitespace_before_opening_quote(self):
        assert parse_line('x,  "a, b"  ,y') == ['x', 'a, b', 'y']

    @pytest.mark.unit
    def test_empty_fields_are_kept(self):
        assert parse_line('a,,c,') == ['a', '', 'c', '']

    @pytest.mark.unit
    def test_unterminated_quote_consumes_rest_of_line(self):
        assert parse_line('a,"b,c') == ['a', 'b,c']

    @pytest.mark.unit
    def test_carriage_return_is_dropped(self):
        assert parse_line('a,b\r') == ['a', 'b']

    @pytest.mark.unit
    def test_interior_carriage_return_does_not_raise(self):
        assert parse_line('x\ry,z') == ['xy', 'z']
        assert parse_line('"x\ry",z') == ['xy', 'z']

    @pytest.mark.unit
    def test_quote_inside_field_is_literal(self):
        assert parse_line('a"b,c"d') == ['a"b', 'c"d']

    @pytest.mark.unit
    def test_empty_line(self):
        assert parse_line('') == []


class TestParseRows:

    @pytest.mark.unit
    def test_quoted_row_maps_to_header(self):
        rows, headers = parse_rows('Genre,Year\n"Rock, ""Prog""",1975\n')
        assert headers == ['Genre', 'Year']
        assert rows == [{'Genre': 'Rock, "Prog"', 'Year': '1975'}]

    @pytest.mark.unit
    def test_blank_lines_produce_no_rows(self):
        text = "A,B\n1,2\n\n   \n3,4\n\n"
        rows, _ = parse_rows(text)
        assert rows == [{'A': '1', 'B': '2'}, {'A': '3', 'B': '4'}]

    @pytest.mark.unit
    def test_short_row_padded_with_empty_strings(self):
        rows, _ = parse_rows("A,B,C\nonly\n")
        assert rows == [{'A': 'only', 'B': '', 'C': ''}]

    @pytest.mark.unit
    def test_extra_fields_are_dropped(self):
        rows, _ = parse_rows("A,B\n1,2,3,4\n")
        assert rows == [{'A': '1', 'B': '2'}]

    @pytest.mark.unit
    def test_rows_of_equal_shape_have_identical_keys(self):
        rows, _ = parse_rows("A,B,C\n1,2,3\nx,,\n")
        assert set(rows[0]) == set(rows[1]) == {'A', 'B', 'C'}

    @pytest.mark.unit
    def test_crlf_line_endings(self):
        rows, headers = parse_rows("A,B\r\n1,2\r\n")
        assert headers == ['A', 'B']
        assert rows == [{'A': '1', 'B': '2'}]

    @pytest.mark.unit
    def test_stray_carriage_return_in_row(self):
        rows, headers = parse_rows('A,B\nx\ry,z\n')
        assert headers == ['A', 'B']
        assert rows == [{'A': 'xy', 'B': 'z'}]

    @pytest.mark.unit
    def test_carriage_return_only_file_is_one_line(self):
        rows, headers = parse_rows('A,B\r1,2\r')
        assert headers == ['A', 'B1', '2']
        assert rows == []

    @pytest.mark.unit
    def test_byte_order_mark_is_ignored(self):
        _, headers = parse_rows("\ufeffArtist,Title\nX,Y\n")
        assert headers == ['Artist', 'Title']

    @pytest.mark.unit
    def test_empty_text(self):
        assert parse_rows('') == ([], [])


class TestParseCollection:

    @pytest.mark.unit
    def test_record_count_matches_non_blank_lines(self, sample_csv_text):
        records, _ = parse_collection(sample_csv_text)
        data_lines = [l for l in sample_csv_text.split('\n')[1:] if l.strip()]
        assert len(records) == len(data_lines) == 6

    @pytest.mark.unit
    def test_records_use_discogs_column_names(self, sample_records):
        abbey = sample_records[0]
        assert abbey.artist == 'The Beatles'
        assert abbey.catalog_number == 'PCS 7088'
        assert abbey.release_id == '2520542'
        assert abbey.media_condition == 'Very Good Plus (VG+)'
        assert abbey.notes == 'Gatefold, "UK" press'
        assert abbey.date_added == '2025-11-21 19:36:00'

    @pytest.mark.unit
    def test_row_ids_follow_source_order(self, sample_records):
        assert [r.row_id for r in sample_records] == list(range(6))
        assert sample_records[4].title == 'Debut'


class TestReadCollection:

    def test_reads_local_file(self, tmp_path, sample_csv_text):
        path = tmp_path / "collection.csv"
        path.write_text(sample_csv_text, encoding="utf-8")
        records, headers = read_collection(path)
        assert len(records) == 6
        assert 'CollectionFolder' in headers

    def test_missing_file_raises_load_error(self, tmp_path):
        with pytest.raises(LoadError):
            read_collection(tmp_path / "missing.csv")

    def test_carriage_return_line_endings_from_file(self, tmp_path):
        path = tmp_path / "collection.csv"
        path.write_bytes(b"Artist,Title\rThe Beatles,Abbey Road\rPink Floyd,Animals\r")
        records, _ = read_collection(path)
        assert [(r.artist, r.title) for r in records] == [('The Beatles', 'Abbey Road'), ('Pink Floyd', 'Animals')]

    @responses.activate
    def test_stray_carriage_return_from_url(self):
        responses.add(
            responses.GET, 'https://example.com/collection.csv',
            body="Artist,Title\r\nThe Beatles,Abbey\rRoad\r\n", status=200,
        )
        records, _ = read_collection('https://example.com/collection.csv')
        assert [(r.artist, r.title) for r in records] == [('The Beatles', 'AbbeyRoad')]

    def test_unparseable_field_raises_load_error(self, tmp_path):
        path = tmp_path / "collection.csv"
        path.write_text("Artist,Title\nX," + "y" * (csv.field_size_limit() + 1) + "\n", encoding="utf-8")
        with pytest.raises(LoadError):
            read_collection(path)

    @responses.activate
    def test_reads_from_url(self, sample_csv_text):
        responses.add(responses.GET, 'https://example.com/collection.csv', body=sample_csv_text, status=200)
        records, _ = read_collection('https://example.com/collection.csv')
        assert len(records) == 6

    @responses.activate
    def test_url_error_raises_load_error(self):
        responses.add(responses.GET, re.compile(r'https://example.com/.*'), status=404)
        with pytest.raises(LoadError):
            read_collection('https://example.com/collection.csv')
