"""Tests for statement segmentation."""
import pytest

from statement_import.segmentation import LineClassifier, StatementSegmenter, split_statement


def _reassemble(segments, header_length):
    """Rebuild the original lines, dropping the repeated header of later segments."""
    lines = segments[0].split('\n')
    for segment in segments[1:]:
        lines.extend(segment.split('\n')[header_length:])
    return lines


def _transaction_lines(segment):
    classifier = LineClassifier()
    return sum(1 for line in segment.split('\n') if line.strip() and classifier.is_transaction_line(line))


class TestStatementSegmenter:
    """Test splitting statements into segments."""

    def test_small_statement_is_one_segment(self, make_statement):
        text = make_statement(10)
        assert split_statement(text, 30) == [text]

    def test_exactly_at_limit(self, make_statement):
        text = make_statement(30)
        assert StatementSegmenter(30).split(text) == [text]

    def test_one_over_limit(self, make_statement, statement_header):
        text = make_statement(31)
        segments = StatementSegmenter(30).split(text)

        assert len(segments) == 2
        assert segments[1].split('\n') == statement_header + [text.split('\n')[-1]]

    def test_forty_five_transactions(self, make_statement, statement_header):
        text = make_statement(45)
        segments = StatementSegmenter(30).split(text)

        assert len(segments) == 2
        assert _transaction_lines(segments[0]) == 30
        assert _transaction_lines(segments[1]) == 15
        assert segments[1].startswith('\n'.join(statement_header) + '\n')

    def test_every_segment_within_budget(self, make_statement):
        segments = StatementSegmenter(7).split(make_statement(50))

        assert len(segments) == 8
        assert all(_transaction_lines(s) <= 7 for s in segments)

    def test_lines_covered_in_order(self, make_statement, statement_header):
        text = make_statement(95)
        segments = StatementSegmenter(30).split(text)

        assert len(segments) == 4
        assert _reassemble(segments, len(statement_header)) == text.split('\n')

    def test_blank_lines_kept(self, statement_header):
        lines = list(statement_header)
        for i in range(12):
            lines.append(f"2024-03-{i + 1:02d} CARD PURCHASE #{i}  {i + 5}.25")
            if i % 3 == 0:
                lines.append("")
        text = '\n'.join(lines) + '\n'

        segments = StatementSegmenter(5).split(text)

        assert len(segments) == 3
        assert _reassemble(segments, len(statement_header)) == text.split('\n')

    def test_no_header(self, make_statement):
        text = make_statement(40, header=False)
        segments = StatementSegmenter(20).split(text)

        assert len(segments) == 2
        assert _reassemble(segments, 0) == text.split('\n')
        assert segments[1].split('\n')[0] == text.split('\n')[20]

    def test_empty_text(self):
        assert StatementSegmenter().split("") == []

    def test_whitespace_only_text(self):
        assert StatementSegmenter().split("   \n  ") == ["   \n  "]

    def test_text_without_transactions(self):
        text = "FIRST NATIONAL BANK\nNo activity this period"
        assert StatementSegmenter().split(text) == [text]

    @pytest.mark.parametrize("value", [0, -1, 1.5, "30", None])
    def test_invalid_budget(self, value):
        with pytest.raises(ValueError):
            StatementSegmenter(value)

    def test_custom_classifier(self):
        class TxnPrefix(LineClassifier):
            def is_transaction_line(self, line):
                return line.startswith("TXN")

        text = "HEADER\nTXN 1\nTXN 2\nTXN 3"
        segments = StatementSegmenter(2, classifier=TxnPrefix()).split(text)

        assert segments == ["HEADER\nTXN 1\nTXN 2", "HEADER\nTXN 3"]
