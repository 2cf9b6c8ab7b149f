"""
Tests for row extractors and the document pipeline.

Sample lists are trimmed copies of real published layouts.
"""

import pytest
from bs4 import BeautifulSoup

from extractors.case_ref import CaseRefExtractor
from extractors.combined_claim import (
    CaseAccumulator,
    CombinedClaimExtractor,
    CombinedState,
)
from extractors.hearing_list import HearingListParser
from extractors.possession_schedule import PossessionScheduleExtractor
from extractors.simple_claim import SimpleClaimExtractor
from processors.deduplicator import ClaimDeduplicator
from processors.document import HearingDocument
from storage.schemas import NOT_PROVIDED, LayoutKind


# Combined "Claim Number Claimant" header, parties in paragraphs
COMBINED_HTML = """
<html>
<head><title>CourtServe: Leeds County Court, Tuesday 18 October 2024</title></head>
<body>
<p>In the County Court sitting at Leeds</p>
<p>Tuesday, 18th October 2024</p>
<table>
<tr><td>Time</td><td>Claim Number Claimant</td><td>Defendant</td></tr>
<tr><td>09:00</td><td><p>CL123</p><p>John Smith</p></td><td><p>Jane Doe</p></td></tr>
</table>
</body>
</html>
"""

# Separate columns, a case spread over two rows, a summary row
MULTI_ROW_HTML = """
<html>
<head><title>CourtServe: Bradford County Court</title></head>
<body>
<p>Friday, 15th November 2024</p>
<table>
<tr><th>Time</th><th>Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
<tr><td>10:00</td><td>K00AB123</td><td>Acme Homes Ltd</td><td>John Smith</td></tr>
<tr><td></td><td></td><td></td><td>Mary Smith</td></tr>
<tr><td>10:30</td><td>K00AB124</td><td>Beta Housing</td><td>Paul Jones</td></tr>
<tr><td></td><td>PCOL</td><td>Summary</td><td>2 cases</td></tr>
</table>
</body>
</html>
"""

INLINE_TABLE = """
<table>
<tr><td>10.30</td><td>Claim K00XY001: Acme Homes Ltd versus John Smith</td></tr>
<tr><td>11.00</td><td>Claim K00XY002: Beta Housing versus Mary Jones</td></tr>
</table>
"""

SIMPLE_HTML = """
<html>
<head><title>CourtServe: Nottingham County Court, 12/11/2024</title></head>
<body>
<p>Nottingham County Court, DJ Wigham, Court Room 7</p>
<table>
<tr><th>Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
<tr><td>K00NG001</td><td>Acme Homes Ltd</td><td>John Smith</td></tr>
<tr><td>K00NG001</td><td>Acme Homes Ltd</td><td>John Smith</td></tr>
<tr><td>PCOL</td><td>Summary</td><td></td></tr>
<tr><td>K00NG002</td><td>Beta | Housing</td><td>Mary Jones</td></tr>
</table>
</body>
</html>
"""

POSSESSION_HTML = """
<html>
<head><title>CourtServe: Cardiff County Court</title></head>
<body>
<p>Dydd Mawrth, 15 Hydref 2024</p>
<table>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>Amser Dechrau / Start Time</td><td>Hyd / Duration</td>
  <td>Manylion yr Achos / Case Details</td><td>Math o Wrandawiad / Hearing Type</td>
  <td>Sianel y Gwrandawiad / Hearing Channel</td>
</tr>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>10:00</td><td>5 minutes</td><td>K00CF001 Acme Homes Ltd v John Smith</td>
  <td>Possession</td><td>In Person</td>
</tr>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>10:05</td><td>5 minutes</td><td>K00CF002 Beta Housing -v- Mary Jones</td>
  <td>Possessions</td><td>Video</td>
</tr>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>10:10</td><td>30 minutes</td><td>K00CF003 Gamma Ltd v Paul Brown</td>
  <td>Small Claims Hearing</td><td>In Person</td>
</tr>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>10:40</td><td>5 minutes</td><td>Parties Suppressed</td>
  <td>Possession</td><td>In Person</td>
</tr>
<tr>
  <td class="EmptyCellLayoutStyle"></td>
  <td>10:45</td><td>5 minutes</td><td>K00CF004 Delta Ltd</td>
  <td>Possession</td><td>Telephone</td>
</tr>
</table>
</body>
</html>
"""

CASE_REF_HTML = """
<html>
<head><title>CourtServe: Manchester County Court</title></head>
<body>
<p>Friday, 15th November 2024</p>
<table>
<tr>
  <th>Time</th><th>Case Ref</th><th>Case Name</th><th>Case Type</th>
  <th>Duration</th><th>Hearing Type</th><th>Hearing Platform</th>
</tr>
<tr>
  <td>10:00</td><td>K00MA001</td><td>Acme Homes Ltd v John Smith</td><td>Possession</td>
  <td>10 mins</td><td>Hearing</td><td>In Person</td>
</tr>
<tr>
  <td>10:10</td><td>K00MA002</td><td>Beta Housing vs Mary Jones</td><td>Poss - Mortgage</td>
  <td>10 mins</td><td>Hearing</td><td>Video</td>
</tr>
<tr>
  <td>10:20</td><td>K00MA003</td><td>Gamma Ltd v Paul Brown</td><td>Small Claim</td>
  <td>1 hour</td><td>Trial</td><td>In Person</td>
</tr>
<tr>
  <td>10:30</td><td>K00MA004</td><td>Delta Estates</td><td>Possession</td>
  <td>10 mins</td><td>Hearing</td><td>In Person</td>
</tr>
</table>
</body>
</html>
"""

UNRECOGNIZED_HTML = """
<html>
<head><title>Site menu</title></head>
<body><p>Nothing to see here</p><table><tr><td>Home</td><td>About</td></tr></table></body>
</html>
"""


def _table(html: str):
    return BeautifulSoup(html, "lxml").find("table")


@pytest.fixture
def parser():
    """Create a document parser."""
    return HearingListParser()


class TestCombinedClaimLayout:
    """Tests for the combined claim number/claimant layout."""

    def test_end_to_end(self, parser):
        """Test the paragraph-joined claim cell is split into claim and claimant."""
        result = parser.parse_html(COMBINED_HTML)

        assert result.layout == LayoutKind.COMBINED_CLAIM_HEADER
        assert len(result.records) == 1

        record = result.records[0]
        assert record.claim_number == "CL123"
        assert record.claimant == "John Smith"
        assert record.defendant == "Jane Doe"
        assert record.duration == NOT_PROVIDED
        assert record.hearing_type == NOT_PROVIDED
        assert record.hearing_channel == NOT_PROVIDED
        assert record.court_name == "Leeds"
        assert record.court_date == "18/10/2024"
        assert record.title == "CourtServe: Leeds County Court, Tuesday 18 October 2024"

    def test_party_cell_split(self):
        """Test three cells where the third holds both parties."""
        table = _table("""
        <table>
        <tr><td>Time</td><td>Claim Number</td><td>Claimant</td><td>Defendant</td></tr>
        <tr><td>09:00</td><td>CL200</td><td><p>Acme Ltd</p><p>Jane Doe</p></td></tr>
        </table>
        """)
        records = CombinedClaimExtractor().extract(table)

        assert len(records) == 1
        assert records[0].claim_number == "CL200"
        assert records[0].claimant == "Acme Ltd"
        assert records[0].defendant == "Jane Doe"

    def test_missing_defendant(self):
        table = _table("""
        <table>
        <tr><td>Time</td><td>Claim Number Claimant</td><td>Defendant</td></tr>
        <tr><td>09:00</td><td>CL300</td><td>Acme Ltd</td></tr>
        </table>
        """)
        records = CombinedClaimExtractor().extract(table)

        assert records[0].claimant == "Acme Ltd"
        assert records[0].defendant == NOT_PROVIDED

    def test_continuation_rows(self, parser):
        """Test a row without a claim number extends the open case."""
        result = parser.parse_html(MULTI_ROW_HTML)

        assert result.layout == LayoutKind.COMBINED_CLAIM_HEADER
        assert [r.claim_number for r in result.records] == ["K00AB123", "K00AB124"]
        assert result.records[0].claimant == "Acme Homes Ltd"
        assert result.records[0].defendant == "John Smith Mary Smith"
        assert result.records[1].defendant == "Paul Jones"

    def test_summary_row_rejected(self, parser):
        result = parser.parse_html(MULTI_ROW_HTML)
        assert all(r.claim_number != "PCOL" for r in result.records)

    def test_inline_claim_rows(self):
        records = CombinedClaimExtractor(title="List").extract(_table(INLINE_TABLE))

        assert [r.claim_number for r in records] == ["K00XY001", "K00XY002"]
        assert records[0].claimant == "Acme Homes Ltd"
        assert records[0].defendant == "John Smith"
        assert records[1].defendant == "Mary Jones"
        assert records[0].title == "List"

    def test_no_header_no_records(self):
        table = _table("<table><tr><td>09:00</td><td>CL1</td><td>A</td></tr></table>")
        assert CombinedClaimExtractor().extract(table) == []

    def test_repeated_header_skipped(self):
        table = _table("""
        <table>
        <tr><td>Time</td><td>Claim Number Claimant</td><td>Defendant</td></tr>
        <tr><td>09:00</td><td>CL1 | Acme</td><td>Jane Doe</td></tr>
        <tr><td>Time</td><td>Claim Number Claimant</td><td>Defendant</td></tr>
        <tr><td>09:30</td><td>CL2 | Beta</td><td>John Doe</td></tr>
        </table>
        """)
        records = CombinedClaimExtractor().extract(table)

        assert [r.claim_number for r in records] == ["CL1", "CL2"]


class TestCaseAccumulator:
    """Tests for the combined layout state machine."""

    def test_transitions(self):
        accumulator = CaseAccumulator()
        assert accumulator.state is CombinedState.AWAITING_HEADER

        accumulator.header_found()
        assert accumulator.state is CombinedState.AWAITING_CASE

        accumulator.start_case("K1", "Acme", "Smith")
        assert accumulator.state is CombinedState.ACCUMULATING_CASE

        cases = accumulator.flush()
        assert accumulator.state is CombinedState.FLUSHED
        assert [case.claim_number for case in cases] == ["K1"]

    def test_continuation_without_case(self):
        accumulator = CaseAccumulator()
        accumulator.header_found()

        assert not accumulator.continue_case("Acme", "Smith")
        assert accumulator.flush() == []

    def test_new_case_closes_open_case(self):
        accumulator = CaseAccumulator()
        accumulator.start_case("K1", "Acme", "Smith")
        accumulator.continue_case("", "Jones")
        accumulator.start_case("K2", "Beta", "Brown")

        cases = accumulator.flush()

        assert [case.claim_number for case in cases] == ["K1", "K2"]
        assert cases[0].defendant == "Smith Jones"

    def test_last_seen_time_carried(self):
        accumulator = CaseAccumulator()
        accumulator.see_time("10.30")
        accumulator.start_case("K1", "Acme", "Smith")
        accumulator.see_time("")
        accumulator.start_case("K2", "Beta", "Brown")

        cases = accumulator.flush()

        assert [case.time for case in cases] == ["10.30", "10.30"]


class TestSimpleClaimLayout:
    """Tests for the plain claim number layout."""

    def test_extract(self, parser):
        result = parser.parse_html(SIMPLE_HTML)

        assert result.layout == LayoutKind.SIMPLE_CLAIM
        assert [r.claim_number for r in result.records] == ["K00NG001", "K00NG002"]

        record = result.records[0]
        assert record.claimant == "Acme Homes Ltd"
        assert record.defendant == "John Smith"
        assert record.duration == NOT_PROVIDED
        assert record.court_name == "Nottingham"
        assert record.court_date == "12/11/2024"

    def test_pipes_stripped(self, parser):
        result = parser.parse_html(SIMPLE_HTML)
        assert result.records[1].claimant == "Beta Housing"

    def test_duplicates_within_table(self):
        """Test the extractor itself keeps duplicates; dedup is separate."""
        records = SimpleClaimExtractor().extract(_table(SIMPLE_HTML))

        assert [r.claim_number for r in records] == ["K00NG001", "K00NG001", "K00NG002"]
        assert len(ClaimDeduplicator().filter(records)) == 2

    def test_repeated_header_not_a_record(self):
        table = _table("""
        <table>
        <tr><th>Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
        <tr><td>K1</td><td>Acme</td><td>Smith</td></tr>
        <tr><th>Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
        <tr><td>K2</td><td>Beta</td><td>Jones</td></tr>
        </table>
        """)
        records = SimpleClaimExtractor().extract(table)

        assert [r.claim_number for r in records] == ["K1", "K2"]

    def test_single_cell_rows_ignored(self):
        table = _table("""
        <table>
        <tr><th>Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
        <tr><td>Court Room 7</td></tr>
        <tr><td>K1</td><td>Acme</td><td>Smith</td></tr>
        </table>
        """)
        records = SimpleClaimExtractor().extract(table)

        assert [r.claim_number for r in records] == ["K1"]

    def test_colspan_data_row(self):
        """Test spanned data cells line up with the header's logical columns."""
        table = _table("""
        <table>
        <tr><th colspan="2">Claim Number</th><th>Claimant</th><th>Defendant</th></tr>
        <tr><td>K1</td><td>x</td><td>Acme</td><td>Smith</td></tr>
        <tr><td colspan="2">K2</td><td>Beta</td><td>Jones</td></tr>
        </table>
        """)
        records = SimpleClaimExtractor().extract(table)

        assert [(r.claim_number, r.claimant, r.defendant) for r in records] == [
            ("K1", "Acme", "Smith"),
            ("K2", "Beta", "Jones"),
        ]


class TestPossessionScheduleLayout:
    """Tests for possession schedules."""

    def test_only_possession_hearings(self, parser):
        result = parser.parse_html(POSSESSION_HTML)

        assert result.layout == LayoutKind.POSSESSION_SCHEDULE
        assert [r.claim_number for r in result.records] == ["K00CF001", "K00CF002", "K00CF004"]
        for record in result.records:
            assert "possession" in record.hearing_type.lower()

    def test_fields(self, parser):
        record = parser.parse_html(POSSESSION_HTML).records[0]

        assert record.claimant == "Acme Homes Ltd"
        assert record.defendant == "John Smith"
        assert record.duration == "5 minutes"
        assert record.hearing_type == "Possession"
        assert record.hearing_channel == "In Person"
        assert record.court_name == "Cardiff"
        assert record.court_date == "15/10/2024"

    def test_dash_separator(self, parser):
        record = parser.parse_html(POSSESSION_HTML).records[1]

        assert record.claimant == "Beta Housing"
        assert record.defendant == "Mary Jones"

    def test_no_separator(self, parser):
        record = parser.parse_html(POSSESSION_HTML).records[2]

        assert record.claimant == NOT_PROVIDED
        assert record.defendant == NOT_PROVIDED

    def test_suppressed_rows_dropped(self):
        records = PossessionScheduleExtractor().extract(_table(POSSESSION_HTML))
        assert all("Suppressed" not in r.claim_number for r in records)


class TestCaseRefLayout:
    """Tests for case reference lists."""

    def test_only_possession_cases(self, parser):
        result = parser.parse_html(CASE_REF_HTML)

        assert result.layout == LayoutKind.CASE_REF
        assert [r.claim_number for r in result.records] == ["K00MA001", "K00MA002", "K00MA004"]

    def test_fields(self, parser):
        records = parser.parse_html(CASE_REF_HTML).records

        assert records[0].claimant == "Acme Homes Ltd"
        assert records[0].defendant == "John Smith"
        assert records[0].duration == "10 mins"
        assert records[0].hearing_type == "Hearing"
        assert records[0].hearing_channel == "In Person"
        assert records[0].court_name == "Manchester"
        assert records[0].court_date == "15/11/2024"

        assert records[1].claimant == "Beta Housing"
        assert records[1].defendant == "Mary Jones"

    def test_no_separator(self):
        records = CaseRefExtractor().extract(_table(CASE_REF_HTML))

        assert records[-1].claim_number == "K00MA004"
        assert records[-1].claimant == NOT_PROVIDED
        assert records[-1].defendant == NOT_PROVIDED


class TestHearingListParser:
    """Tests for the document pipeline."""

    def test_unrecognized(self, parser):
        result = parser.parse_html(UNRECOGNIZED_HTML)

        assert result.layout == LayoutKind.UNRECOGNIZED
        assert result.records == []
        assert result.is_empty
        assert result.skip_reason == "unrecognized layout"

    def test_no_candidate_table(self, parser):
        """Test a recognised layout without a matching table gives no records."""
        html = "<html><body><p>Case Ref and Case Name to follow</p></body></html>"
        result = parser.parse_html(html)

        assert result.layout == LayoutKind.CASE_REF
        assert result.tables_found == 0
        assert result.is_empty

    def test_court_name_from_paragraph(self, parser):
        html = MULTI_ROW_HTML.replace(
            "CourtServe: Bradford County Court", "Daily List"
        ).replace("<p>Friday", "<p>In the County Court at Bradford</p><p>Friday")
        result = parser.parse_html(html)

        assert result.records[0].court_name == "Bradford"
        assert result.records[0].court_date == "15/11/2024"

    def test_missing_date_keeps_record(self, parser):
        html = MULTI_ROW_HTML.replace("<p>Friday, 15th November 2024</p>", "")
        result = parser.parse_html(html)

        assert len(result.records) == 2
        assert result.records[0].court_date == ""

    def test_shared_deduplicator(self, parser):
        deduplicator = ClaimDeduplicator()
        first = parser.parse(HearingDocument.from_html(SIMPLE_HTML), deduplicator)
        second = parser.parse(HearingDocument.from_html(SIMPLE_HTML), deduplicator)

        assert len(first.records) == 2
        assert second.records == []

    def test_fresh_deduplicator_per_document(self, parser):
        first = parser.parse_html(SIMPLE_HTML)
        second = parser.parse_html(SIMPLE_HTML)

        assert len(first.records) == len(second.records) == 2

    def test_failing_table_skipped(self, parser, monkeypatch):
        """Test an unexpected error in one table does not escape parse()."""

        def boom(self, table):
            raise RuntimeError("broken table")

        monkeypatch.setattr(SimpleClaimExtractor, "extract", boom)
        result = parser.parse_html(SIMPLE_HTML)

        assert result.layout == LayoutKind.SIMPLE_CLAIM
        assert result.tables_found == 1
        assert result.records == []

    def test_data_table_with_nested_note_table(self, parser):
        """Test a note table inside a data cell does not hide the data rows."""
        html = """
        <html><body>
        <table>
        <tr><td>Time</td><td>Claim Number</td><td>Claimant</td><td>Defendant</td></tr>
        <tr><td>10:00</td><td>K00AB123</td><td>Acme Homes Ltd</td><td>John Smith</td></tr>
        <tr><td colspan="4"><table><tr><td>Hearing room three notes</td></tr></table></td></tr>
        </table>
        </body></html>
        """
        result = parser.parse_html(html)

        assert result.layout == LayoutKind.COMBINED_CLAIM_HEADER
        assert [r.claim_number for r in result.records] == ["K00AB123"]
        assert result.records[0].claimant == "Acme Homes Ltd"
        assert result.records[0].defendant == "John Smith"
