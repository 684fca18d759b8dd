"""
Tests for the example container builder (nanos.examples).
"""

from nanos import Container, parse_slid
from nanos.examples import build_example_container


def test_build_example_container_basic():
    c = build_example_container(job_count=2)
    assert c.at("id") == 2204
    assert c.next == 3
    jobs = list(c.values())
    assert len(jobs) == 2
    assert all(isinstance(job, Container) for job in jobs)
    assert c.at([1, "status"]) == "closed"


def test_example_locks_and_redaction():
    c = build_example_container(job_count=1)
    assert c.is_locked("id")
    assert c.is_redacted("token")
    assert c.at("token") == "s3cr3t"


def test_example_to_string():
    c = build_example_container(job_count=2)
    assert c.to_string() == (
        "[(id=2204 title='Example job list' "
        "[BType1 'Employment type for job 1' status=open] "
        "[BType2 'Employment type for job 2' status=closed] "
        "tags=[survey jobs] @e)]"
    )


def test_example_without_secret():
    c = build_example_container(job_count=1, with_secret=False)
    assert not c.has("token")


def test_example_parses_back():
    c = build_example_container()
    text = c.to_slid()
    assert "token=s3cr3t" in text
    parsed = parse_slid(text)
    assert parsed.to_slid() == text
    assert parsed.next == c.next
