"""Integration tests for the HTTP API.

These tests exercise the full HTTP stack: FastAPI -> route -> engine, with the
engine wired to in-memory collaborators.
"""

import pytest

from core.constants import StepType
from tasks.base_task import BaseTask

RUN_URL = "/api/v1/workflows/execute"


class ExplodingTask(BaseTask):
    step_type = StepType.CONDITION

    async def execute(self, step, data):
        raise AssertionError("unreachable")

    async def run(self, step, data):
        raise RuntimeError("kaput")


# ─── Health Endpoints ───

class TestHealthIntegration:

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"

    @pytest.mark.asyncio
    async def test_status_lists_step_types(self, client):
        resp = await client.get("/api/v1/health/status")
        assert resp.status_code == 200
        assert set(resp.json()["step_types"]) == {t.value for t in StepType}


# ─── Run Submission ───

@pytest.mark.integration
class TestExecuteWorkflow:

    @pytest.mark.asyncio
    async def test_completed_run(self, client, store):
        store.add_workflow({
            "id": "wf-1",
            "steps": [
                {"id": "open", "type": "data_transformation",
                 "config": {"transformation": "filter", "conditions": [{"field": "status", "value": "open"}]}},
                {"id": "call", "type": "api_call", "config": {"url": "https://api.example.com"}},
            ],
        })

        resp = await client.post(RUN_URL, json={
            "workflowId": "wf-1",
            "userId": "user-1",
            "data": {"data": [{"status": "open"}, {"status": "closed"}]},
        })

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["status"] == "completed"
        assert body["workflowId"] == "wf-1"
        assert body["executionId"]
        assert body["results"]["open"]["result"] == [{"status": "open"}]
        assert "error" not in body["results"]["open"]
        assert body["results"]["call"]["success"] is True
        assert body["metadata"]["stepsCompleted"] == 2
        assert body["metadata"]["totalSteps"] == 2
        assert resp.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_step_failure_still_200(self, client, store, http_client):
        http_client.status = 503
        store.add_workflow({
            "id": "wf-1",
            "steps": [{"id": "call", "type": "api_call", "config": {"url": "https://api.example.com"}}],
        })

        resp = await client.post(RUN_URL, json={"workflowId": "wf-1", "userId": "user-1"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["results"]["call"]["success"] is False
        assert body["results"]["call"]["error"] == "API call failed: 503"
        assert "result" not in body["results"]["call"]

    @pytest.mark.asyncio
    async def test_unknown_workflow_is_404(self, client):
        resp = await client.post(RUN_URL, json={"workflowId": "ghost", "userId": "user-1"})

        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Workflow not found"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_missing_fields_is_422(self, client):
        resp = await client.post(RUN_URL, json={"workflowId": "wf-1"})

        assert resp.status_code == 422
        body = resp.json()
        assert body["success"] is False
        assert "userId" in body["error"]

    @pytest.mark.asyncio
    async def test_invalid_definition_is_422(self, client, store):
        store.add_workflow({
            "id": "wf-1",
            "steps": [{"id": "a", "type": "condition", "config": {}, "dependencies": ["zzz"]}],
        })

        resp = await client.post(RUN_URL, json={"workflowId": "wf-1", "userId": "user-1"})

        assert resp.status_code == 422
        assert "unknown step 'zzz'" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_engine_fault_is_500_with_partial_results(self, client, store, registry):
        registry.register(StepType.CONDITION, ExplodingTask)
        store.add_workflow({
            "id": "wf-1",
            "steps": [
                {"id": "first", "type": "data_transformation", "config": {"transformation": "noop"}},
                {"id": "second", "type": "condition", "config": {}},
            ],
        })

        resp = await client.post(RUN_URL, json={"workflowId": "wf-1", "userId": "user-1", "data": []})

        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["status"] == "failed"
        assert body["error"] == "Step 'second' raised unexpectedly: kaput"
        assert list(body["results"]) == ["first"]
        assert body["metadata"]["stepsCompleted"] == 1

    @pytest.mark.asyncio
    async def test_edge_function_alias(self, client, store):
        store.add_workflow({"id": "wf-1", "steps": []})

        resp = await client.post("/workflow-orchestrator", json={
            "workflowId": "wf-1",
            "userId": "user-1",
            "trigger": "webhook",
        })

        assert resp.status_code == 200
        assert resp.json()["metadata"]["totalSteps"] == 0

    @pytest.mark.asyncio
    async def test_recorded_run(self, client, store, sink):
        store.add_workflow({"id": "wf-1", "steps": []})

        await client.post(RUN_URL, json={"workflowId": "wf-1", "userId": "user-1", "metadata": {"src": "test"}})

        assert sink.records[0]["metadata"] == {"src": "test"}


class TestStepTypes:

    @pytest.mark.asyncio
    async def test_lists_schemas(self, client):
        resp = await client.get("/api/v1/workflows/step-types")

        assert resp.status_code == 200
        types = {t["step_type"]: t for t in resp.json()}
        assert "prompt" in types["ai_processing"]["config_schema"]["properties"]
        assert "useCase" in types["ai_processing"]["config_schema"]["properties"]
