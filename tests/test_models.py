from datetime import datetime, timedelta, timezone

import pytest

from circleci_tui.errors import ParseError
from circleci_tui.models import (
    ExecutorInfo,
    Job,
    Pipeline,
    TriggerInfo,
    VcsInfo,
    Workflow,
    mock_pipelines,
)

BASE = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_pipeline():
    return Pipeline(
        id="test-pipeline-id",
        number=123,
        state="success",
        created_at=BASE,
        updated_at=BASE,
        vcs=VcsInfo(
            branch="main",
            revision="abc123",
            commit_subject="Test commit",
            commit_author_name="test-user",
            commit_timestamp=BASE,
        ),
        trigger=TriggerInfo(trigger_type="webhook"),
        project_slug="gh/test/repo",
    )


def make_workflow(start, stop, wid="wf"):
    return Workflow(
        id=wid,
        name="build",
        status="success",
        created_at=start,
        stopped_at=stop,
        pipeline_id="test-pipeline-id",
    )


def make_job(status="success", duration=None, started=None, stopped=None):
    return Job(
        id="test-job-id",
        name="test-job",
        status=status,
        job_number=1,
        workflow_id="test-workflow-id",
        started_at=started,
        stopped_at=stopped,
        duration=duration,
        executor=ExecutorInfo(executor_type="docker"),
    )


def test_pipeline_duration_without_workflows():
    pipeline = make_pipeline()
    assert pipeline.calculate_duration_from_workflows(None) == "--"
    assert pipeline.calculate_duration_from_workflows([]) == "--"


def test_pipeline_duration_still_running():
    pipeline = make_pipeline()
    wfs = [make_workflow(BASE, None)]
    assert pipeline.calculate_duration_from_workflows(wfs) == "..."


def test_pipeline_duration_whole_minutes_drop_seconds():
    pipeline = make_pipeline()
    wfs = [make_workflow(BASE, BASE + timedelta(minutes=1))]
    assert pipeline.calculate_duration_from_workflows(wfs) == "1m"


def test_pipeline_duration_spans_earliest_start_to_latest_stop():
    pipeline = make_pipeline()
    spread = [
        make_workflow(BASE, BASE + timedelta(seconds=10), "a"),
        make_workflow(BASE + timedelta(seconds=5), BASE + timedelta(minutes=1), "b"),
    ]
    single = [make_workflow(BASE, BASE + timedelta(minutes=1))]
    assert pipeline.calculate_duration_from_workflows(
        spread
    ) == pipeline.calculate_duration_from_workflows(single)


def test_pipeline_duration_ignores_unfinished_when_some_stopped():
    pipeline = make_pipeline()
    mixed = [
        make_workflow(BASE, BASE + timedelta(minutes=1), "a"),
        make_workflow(BASE, None, "b"),
    ]
    finished = [make_workflow(BASE, BASE + timedelta(minutes=1), "a")]
    assert pipeline.calculate_duration_from_workflows(
        mixed
    ) == pipeline.calculate_duration_from_workflows(finished)


def test_pipeline_duration_never_negative():
    pipeline = make_pipeline()
    backwards = [make_workflow(BASE, BASE - timedelta(minutes=5))]
    zero = [make_workflow(BASE, BASE)]
    assert pipeline.calculate_duration_from_workflows(
        backwards
    ) == pipeline.calculate_duration_from_workflows(zero)


def test_pipeline_duration_hours():
    pipeline = make_pipeline()
    wfs = [make_workflow(BASE, BASE + timedelta(hours=1, minutes=1, seconds=1))]
    assert pipeline.calculate_duration_from_workflows(wfs) == "1h 1m"


def test_workflow_running_text():
    assert make_workflow(BASE, None).duration_formatted() == "running..."


def test_workflow_minutes_keep_seconds_field():
    wf = make_workflow(BASE, BASE + timedelta(minutes=2, seconds=5))
    assert wf.duration_formatted() == "2m 5s"


def test_job_duration_matches_workflow_format():
    job = make_job(duration=125)
    wf = make_workflow(BASE, BASE + timedelta(seconds=125))
    assert job.duration_formatted() == wf.duration_formatted()


def test_job_duration_without_value():
    assert make_job(started=BASE).duration_formatted() == "running..."
    assert make_job().duration_formatted() == "pending"


def test_job_is_running():
    assert make_job(status="running").is_running()
    assert not make_job(status="running", stopped=BASE).is_running()
    assert not make_job(status="success").is_running()


def test_job_from_dict():
    job = Job.from_dict(
        {
            "id": "job-1",
            "name": "lint",
            "status": "failed",
            "job_number": 42,
            "workflow_id": "wf-9",
            "started_at": "2024-01-01T12:00:00Z",
            "executor": {"type": "machine"},
        }
    )
    assert job.job_number == 42
    assert job.executor.executor_type == "machine"
    assert job.started_at == BASE
    assert job.stopped_at is None and job.duration is None
    assert job == make_job(status="failed", started=BASE).__class__.from_dict(
        {
            "id": "job-1",
            "name": "lint",
            "status": "failed",
            "job_number": 42,
            "workflow_id": "wf-9",
            "started_at": "2024-01-01T12:00:00+00:00",
            "executor": {"type": "machine"},
        }
    )


def test_workflow_from_dict():
    wf = Workflow.from_dict(
        {
            "id": "wf-1",
            "name": "build",
            "status": "success",
            "created_at": "2024-01-01T12:00:00Z",
            "stopped_at": None,
            "pipeline_id": "p-1",
        }
    )
    assert wf.created_at == BASE
    assert wf.duration_formatted() == "running..."


def test_pipeline_from_dict():
    pipeline = Pipeline.from_dict(
        {
            "id": "test-pipeline-id",
            "number": 123,
            "state": "success",
            "created_at": "2024-01-01T12:00:00Z",
            "updated_at": "2024-01-01T12:00:00Z",
            "vcs": {
                "branch": "main",
                "revision": "abc123",
                "commit_subject": "Test commit",
                "commit_author_name": "test-user",
                "commit_timestamp": "2024-01-01T12:00:00Z",
            },
            "trigger": {"type": "webhook"},
            "project_slug": "gh/test/repo",
        }
    )
    assert pipeline == make_pipeline()


def test_from_dict_missing_field_raises():
    with pytest.raises(ParseError):
        Job.from_dict({"id": "job-1"})


def test_from_dict_bad_timestamp_raises():
    with pytest.raises(ParseError):
        Workflow.from_dict(
            {
                "id": "wf-1",
                "name": "build",
                "status": "success",
                "created_at": "yesterday",
                "pipeline_id": "p-1",
            }
        )


def test_mock_pipelines():
    pipelines = mock_pipelines(BASE)
    assert [p.number for p in pipelines] == list(range(1234, 1242))
    assert pipelines[0].id == "pipe-001"
    assert pipelines[0].created_at == BASE - timedelta(hours=2)
    assert pipelines[3].trigger.trigger_type == "scheduled"
    assert all(p.project_slug == "gh/acme/api-service" for p in pipelines)
    assert all(p.updated_at >= p.created_at for p in pipelines)