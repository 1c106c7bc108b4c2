"""Tests for dump row classification and field parsing."""

import pytest

from row_classifier import (
    RowKind,
    classify_item_line,
    classify_named_tail,
    classify_simple,
    classify_spell_line,
    clean_fields,
    iter_lines,
    parse_float,
    parse_hex,
    parse_int,
    parse_stats_pointer,
    split_named,
    unquote,
)


class TestSplitting:

    def test_clean_fields_strips_braces(self):
        assert clean_fields("  {  40,  5259, 0.000000 },") == ["40", "5259", "0.000000", ""]

    def test_clean_fields_nested_arrays(self):
        fields = clean_fields("{ 1, { 8, 0, 0 }, 2 },")
        assert fields == ["1", "8", "0", "0", "2", ""]

    def test_split_named_keeps_embedded_quotes(self):
        name, data = split_named('{ "The "Big" One", 42, 7 },')
        assert name == 'The "Big" One'
        assert data == ["", "42", "7", ""]

    def test_data_segment_starts_blank(self):
        _, data = split_named('{ "Sword", 1 },')
        assert data[0] == ""

    def test_iter_lines_handles_crlf(self):
        assert list(iter_lines("a\r\nb\nc")) == ["a", "b", "c"]

    def test_iter_lines_empty(self):
        assert list(iter_lines(None)) == []
        assert list(iter_lines("")) == []


class TestItemLines:

    def test_mod_row(self):
        row = classify_item_line("  {  40,  5259, 0.000000 },")
        assert row.kind is RowKind.MOD
        assert row.fields[:3] == ["40", "5259", "0.000000"]

    def test_short_mod_row_skipped(self):
        assert classify_item_line("  {   7 },").kind is RowKind.SKIP

    def test_declaration_skipped(self):
        assert classify_item_line("static item_stats_t __item_stats_data[] = {").kind is RowKind.SKIP

    def test_item_header(self):
        line = ('{ "Band", 178000, 0x0, 0x0, 0x00, 200, 50, 0, 0, 4, 11, 4, 0, 1, 0.00, 0.00, '
                '0.00, &__item_stats_data[1], 1, 0xffffffff, 0xffffffffffffffff, { 8, 0, 0 }, '
                '0, 0, 0, 0, 0 },')
        row = classify_item_line(line)
        assert row.kind is RowKind.ITEM_HEADER
        assert row.name == "Band"
        assert row.fields[1] == "178000"

    def test_truncated_item_skipped(self):
        assert classify_item_line('{ "Truncated Row", 178600, 0x00 },').kind is RowKind.SKIP


class TestSpellLines:

    def test_effect_row_by_field_count(self):
        values = ", ".join(["0"] * 34)
        row = classify_spell_line("{ " + values + " },")
        assert row.kind is RowKind.SPELL_EFFECT
        assert len(row.fields) == 35

    def test_power_row_by_field_count(self):
        row = classify_spell_line("{ 1001, 589, 0, 0, 0, 0, 0, 0.750000, 0.000000, 0.000000 },")
        assert row.kind is RowKind.SPELL_POWER

    def test_placeholder_power_row_skipped(self):
        line = "{ &__spell_data[0], 0, 0, 0, 0, 0, 0, 0.0, 0.0, 0.0 },"
        assert classify_spell_line(line).kind is RowKind.SKIP

    def test_other_counts_skipped(self):
        assert classify_spell_line("{ 1, 2, 3 },").kind is RowKind.SKIP

    def test_header_needs_enough_fields(self):
        assert classify_spell_line('{ "Tiny", 1, 2 },').kind is RowKind.SKIP
        values = ", ".join(["0"] * 25)
        row = classify_spell_line('{ "Shadow Word: Pain", ' + values + " },")
        assert row.kind is RowKind.SPELL_HEADER
        assert row.name == "Shadow Word: Pain"


class TestSimpleRows:

    def test_min_fields(self):
        assert classify_simple("{ 1, 2 },", min_fields=4).kind is RowKind.SKIP
        assert classify_simple("{ 1, 2, 3 },", min_fields=4).kind is RowKind.MOD

    def test_exact_fields(self):
        assert classify_simple("{ 1, 2, 3, 4 },", exact_fields=5).kind is RowKind.MOD
        assert classify_simple("{ 1, 2, 3, 4, 5 },", exact_fields=5).kind is RowKind.SKIP

    def test_named_tail(self):
        line = '{ 1, 5, 103325, { 0, 0 }, "Light\'s Inspiration" },'
        row = classify_named_tail(line, 5)
        assert row.kind is RowKind.NAMED
        assert row.fields == ["1", "5", "103325", "0", "0"]
        assert row.name == "Light's Inspiration"

    def test_named_tail_too_short(self):
        assert classify_named_tail('{ 1, 11, "Too Short" },', 5).kind is RowKind.SKIP

    def test_named_tail_without_name(self):
        assert classify_named_tail("{ 1, 2, 3 },", 2).kind is RowKind.SKIP


class TestFieldParsers:

    def test_parse_int_decimal_and_hex(self):
        assert parse_int(" 42 ") == 42
        assert parse_int("-1") == -1
        assert parse_int("0x10") == 16

    def test_parse_int_rejects_junk(self):
        with pytest.raises(ValueError):
            parse_int("abc")

    def test_parse_hex(self):
        assert parse_hex("0x00081000") == 0x81000
        assert parse_hex("ff") == 255
        assert parse_hex("0x") == 0

    def test_parse_float_suffix(self):
        assert parse_float("1.5f") == 1.5
        assert parse_float("0.441000") == pytest.approx(0.441)

    def test_stats_pointer(self):
        assert parse_stats_pointer("0") == 0
        assert parse_stats_pointer("&__item_stats_data[12]") == 12

    def test_stats_pointer_rejects_junk(self):
        with pytest.raises(ValueError):
            parse_stats_pointer("&__other[3]")

    def test_unquote(self):
        assert unquote(' "+16 Haste" ') == "+16 Haste"
