"""
Shared fixtures for apptrack tests.

File-backed stores live under pytest's tmp_path; the generation service is
always a MagicMock so no test touches the network.
"""

from unittest.mock import MagicMock

import pytest

from apptrack.backends import CsvStore
from apptrack.llm import GenerationClient
from apptrack.models import ApplicationRecord, Draft
from apptrack.store import ApplicationStore


@pytest.fixture
def csv_store(tmp_path):
    return CsvStore(root=tmp_path / "users")


@pytest.fixture
def store(csv_store):
    s = ApplicationStore(csv_store)
    s.sign_in("alice")
    return s


@pytest.fixture
def fake_client():
    """GenerationClient double; set .generate.return_value / side_effect per test."""
    client = MagicMock(spec=GenerationClient)
    client.generate.return_value = "{}"
    return client


@pytest.fixture
def draft():
    return Draft(job_title="Backend Engineer", company_name="Acme", job_id="A-1")


def make_record(record_id: str, **overrides) -> ApplicationRecord:
    values = {"job_title": "Engineer", "company_name": "Acme", "status": "Applied"}
    values.update(overrides)
    return ApplicationRecord(id=record_id, **values)


@pytest.fixture
def sample_records():
    return [
        make_record("r1", job_title="Software Engineer", company_name="Initech", job_id="100", status="Applied"),
        make_record("r2", job_title="Data Analyst", company_name="Engage Labs", job_id="200", status="Interview"),
        make_record("r3", job_title="Product Manager", company_name="Globex", job_id="ENG-7", status="Pending"),
        make_record("r4", job_title="Platform Engineer", company_name="Hooli", job_id="300", status="Interview"),
        make_record("r5", job_title="Designer", company_name="Umbrella", job_id="", status="Rejected"),
    ]
