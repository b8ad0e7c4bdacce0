"""Tests for the relationship symmetry audit job."""

import pytest

from app.api.endpoints import relationships as relationships_endpoint
from app.models import ProcessingJob, Relationship
from app.tasks import celery_tasks
from app.tasks.celery_tasks import audit_relationships_task

from graph_helpers import assert_graph_consistent


class RecordingTask:
    """Stands in for the Celery task; records .delay() calls"""

    def __init__(self):
        self.calls = []

    def delay(self, *args):
        self.calls.append(args)


@pytest.fixture
def task_session(monkeypatch, session_factory):
    monkeypatch.setattr(celery_tasks, "SessionLocal", session_factory)


@pytest.fixture
def lopsided_graph(db_session, make_member):
    """A spouse pair stored correctly plus one legacy edge missing its reciprocal"""
    a = make_member("Alice", gender="female")
    b = make_member("Bob")
    c = make_member("Carol", gender="female")
    db_session.add_all([
        Relationship(from_member_id=a, to_member_id=b, relation_type="spouse"),
        Relationship(from_member_id=b, to_member_id=a, relation_type="spouse"),
        Relationship(from_member_id=c, to_member_id=a, relation_type="parent"),
    ])
    db_session.commit()
    return a, b, c


def create_job(db_session):
    job = ProcessingJob(job_type="relationship_audit", status="pending")
    db_session.add(job)
    db_session.commit()
    return job.id


class TestAuditTask:

    def test_report_only(self, db_session, task_session, lopsided_graph):
        a, _, c = lopsided_graph
        job_id = create_job(db_session)

        result = audit_relationships_task(job_id, False)

        assert result == {"status": "success", "asymmetric_edges": 1, "repaired": 0}
        db_session.expire_all()
        job = db_session.query(ProcessingJob).filter(ProcessingJob.id == job_id).one()
        assert job.status == "completed"
        assert job.total_records == 3
        assert job.result_data["edges"][0]["fromMemberId"] == c
        assert job.result_data["edges"][0]["toMemberId"] == a
        assert db_session.query(Relationship).count() == 3

    def test_repair(self, db_session, task_session, lopsided_graph):
        job_id = create_job(db_session)

        result = audit_relationships_task(job_id, True)

        assert result["repaired"] == 1
        assert db_session.query(Relationship).count() == 4
        assert_graph_consistent(db_session)

    def test_missing_job(self, db_session, task_session):
        assert audit_relationships_task(4242, False) == {"error": "Job not found"}


class TestAuditEndpoints:

    def test_audit_queues_job(self, client, monkeypatch):
        task = RecordingTask()
        monkeypatch.setattr(relationships_endpoint, "audit_relationships_task", task)

        response = client.post("/api/relationships/audit", params={"repair": "true"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "pending"
        assert task.calls == [(body["jobId"], True)]

        job = client.get(f"/api/jobs/{body['jobId']}").json()
        assert job["jobType"] == "relationship_audit"
        assert job["status"] == "pending"

    def test_unknown_job(self, client):
        assert client.get("/api/jobs/999").status_code == 404
