"""
Example container builder used by the demo and the tests.

Builds a small "job list" record mixing positional entries, named entries,
nested containers, a sparse hole, a redacted secret and a locked id.
"""
from nanos.model import Container
from nanos.values import Hole


def build_example_container(job_count: int = 3, with_secret: bool = True) -> Container:
    record = Container()
    record.set("id", 2204)
    record.set("title", "Example job list")

    for i in range(1, job_count + 1):
        # Each job: [BType<i> 'Employment type for job <i>' status=open]
        job = record.similar(f"BType{i}", f"Employment type for job {i}")
        job.set("status", "open" if i % 2 else "closed")
        record.push([job])

    # A reserved (empty) slot after the jobs
    record.push([Hole])

    record.set("tags", Container("survey", "jobs"))
    if with_secret:
        record.set("token", "s3cr3t")
        record.redact("token")

    record.lock("id")
    return record
