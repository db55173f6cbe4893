"""Tests for heuristic job-id extraction (apptrack/job_id.py)."""

import pytest

from apptrack.job_id import extract_identifier


class TestQueryParameters:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://careers.acme.com/apply?gh_jid=4412345", "4412345"),
            ("https://acme.com/careers/job?job_id=XYZ-9&utm_source=li", "XYZ-9"),
            ("acme.com/jobs?jobid=777", "777"),
            ("https://recruit.acme.jp/detail?jrno=J0042", "J0042"),
            ("https://jobs.acme.com/view?requisitionId=REQ123", "REQ123"),
            ("https://www.indeed.com/viewjob?jk=abc123def", "abc123def"),
            ("https://www.linkedin.com/jobs/search/?currentJobId=3900112233", "3900112233"),
        ],
    )
    def test_known_parameter_wins(self, url, expected):
        assert extract_identifier(url, "") == expected

    def test_query_beats_path_and_text(self):
        url = "https://boards.greenhouse.io/acme/jobs/987654?gh_jid=111"
        assert extract_identifier(url, "Job ID: 555") == "111"

    def test_key_order_is_respected(self):
        url = "https://acme.com/job?rid=second&gh_jid=first"
        assert extract_identifier(url, "") == "first"

    def test_empty_value_is_skipped(self):
        url = "https://acme.com/job?gh_jid=&job_id=42"
        assert extract_identifier(url, "") == "42"


class TestPathPatterns:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://boards.greenhouse.io/acme/jobs/987654", "987654"),
            ("https://job-boards.greenhouse.io/acme/jobs/5550001", "5550001"),
            (
                "https://jobs.lever.co/acme/0b6a7e52-1f0e-4e7b-9c55-3f2a1d9e8b10",
                "0b6a7e52-1f0e-4e7b-9c55-3f2a1d9e8b10",
            ),
            (
                "https://jobs.ashbyhq.com/acme/6f1c2d3e-4a5b-6c7d-8e9f-0a1b2c3d4e5f",
                "6f1c2d3e-4a5b-6c7d-8e9f-0a1b2c3d4e5f",
            ),
            (
                "https://acme.wd5.myworkdayjobs.com/en-US/External/job/Austin-TX/Software-Engineer_R-01234",
                "R-01234",
            ),
            ("https://jobs.smartrecruiters.com/Acme/743999912345678-senior-engineer", "743999912345678"),
            ("https://careers-acme.icims.com/jobs/12345/software-engineer/job", "12345"),
            ("https://www.linkedin.com/jobs/view/senior-engineer-at-acme-3912345678", "3912345678"),
        ],
    )
    def test_vendor_patterns(self, url, expected):
        assert extract_identifier(url, "") == expected

    def test_scheme_is_added_before_matching(self):
        assert extract_identifier("boards.greenhouse.io/acme/jobs/42", "") == "42"


class TestFreeText:
    def test_job_id_label(self):
        assert extract_identifier("https://acme.com/careers/backend", "Title\nJob ID: 12345\nMore") == "12345"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Requisition ID: R-2024-88.", "R-2024-88"),
            ("req id #A77", "A77"),
            ("Posting Number - PN_5512,", "PN_5512"),
            ("Reference Number 9001)", "9001"),
        ],
    )
    def test_other_labels_and_trailing_punctuation(self, text, expected):
        assert extract_identifier("https://acme.com/careers", text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Job ID12345", "Job ID: #12345", "Job ID -: 12345", "JOB ID\n\n12345"],
    )
    def test_separator_is_optional_and_may_repeat(self, text):
        assert extract_identifier("https://acme.com/careers", text) == "12345"


class TestNoMatch:
    def test_nothing_found(self):
        assert extract_identifier("https://acme.com/careers/backend", "We are hiring!") == ""

    @pytest.mark.parametrize("url", ["http://[::1", "", "   ", "::::", "https://exa mple.com/%%%"])
    def test_malformed_urls_never_raise(self, url):
        assert extract_identifier(url, "") == ""

    def test_malformed_url_still_reads_text(self):
        assert extract_identifier("http://[::1", "Job ID: 8") == "8"

    def test_none_text(self):
        assert extract_identifier("https://acme.com", None) == ""
