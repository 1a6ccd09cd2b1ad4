"""Endpoint tests over ASGI with the database session overridden."""

import random
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from factories import make_agent
from los.deps import get_session
from los.main import app
from los.services.agent_selector import AgentSelector
from los.services.loan_processing_engine import LoanProcessingEngine


@pytest_asyncio.fixture
async def client(session_factory, dispatcher, pool):
    async def override_session():
        async with session_factory() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_session] = override_session
    app.state.notification_dispatcher = dispatcher
    app.state.processing_engine = LoanProcessingEngine(
        session_factory=session_factory,
        notifier=dispatcher,
        pool=pool,
        selector=AgentSelector(rng=random.Random(1)),
    )
    app.state.scheduler = None

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    del app.state.processing_engine
    del app.state.notification_dispatcher
    del app.state.scheduler


def _application(**overrides):
    payload = {
        "customer_name": "Jane Doe",
        "customer_phone": "+15550001234",
        "loan_amount": "60000.00",
        "loan_type": "AUTO",
    }
    payload.update(overrides)
    return payload


class TestLoanEndpoints:
    @pytest.mark.asyncio
    async def test_submit_and_fetch(self, client):
        resp = await client.post("/api/v1/loans", json=_application())

        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "APPLIED"
        assert body["loan_id"].startswith("LOAN-")

        by_id = await client.get(f"/api/v1/loans/{body['id']}")
        by_loan_id = await client.get(f"/api/v1/loans/by-loan-id/{body['loan_id']}")
        assert by_id.json()["loan_id"] == body["loan_id"]
        assert by_loan_id.json()["id"] == body["id"]

    @pytest.mark.asyncio
    async def test_submit_validates_payload(self, client):
        bad_phone = await client.post("/api/v1/loans", json=_application(customer_phone="call me"))
        bad_amount = await client.post("/api/v1/loans", json=_application(loan_amount="0"))
        bad_type = await client.post("/api/v1/loans", json=_application(loan_type="BOAT"))

        assert bad_phone.status_code == 422
        assert bad_amount.status_code == 422
        assert bad_type.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_loans_are_404(self, client):
        assert (await client.get(f"/api/v1/loans/{uuid.uuid4()}")).status_code == 404
        assert (await client.get("/api/v1/loans/by-loan-id/LOAN-NOPE")).status_code == 404

    @pytest.mark.asyncio
    async def test_list_by_status_and_status_count(self, client):
        for _ in range(3):
            await client.post("/api/v1/loans", json=_application())

        listing = await client.get("/api/v1/loans", params={"status": "APPLIED", "page_size": 2})
        counts = await client.get("/api/v1/loans/status-count")

        assert listing.status_code == 200
        assert listing.json()["total"] == 3
        assert listing.json()["total_pages"] == 2
        assert len(listing.json()["items"]) == 2
        assert counts.json()["counts"]["APPLIED"] == 3
        assert counts.json()["counts"]["APPROVED_BY_AGENT"] == 0
        assert counts.json()["total"] == 3


class TestProcessingFlow:
    @pytest.mark.asyncio
    async def test_review_then_agent_decision(self, client, db_session, dispatcher):
        agent = await make_agent(
            db_session, agent_id="AGENT-A", specializations="AUTO", max_loan_amount="75000"
        )
        other = await make_agent(
            db_session, agent_id="AGENT-X", specializations="HOME", max_loan_amount="10000"
        )
        loan = (await client.post("/api/v1/loans", json=_application())).json()

        run = await client.post("/api/v1/processing/run")
        assert run.status_code == 200
        assert run.json()["under_review"] == 1

        reviewed = (await client.get(f"/api/v1/loans/{loan['id']}")).json()
        assert reviewed["status"] == "UNDER_REVIEW"
        assert reviewed["assigned_agent_id"] == str(agent.id)

        decision_url = f"/api/v1/agents/{{agent_id}}/loans/{loan['loan_id']}/decision"

        forbidden = await client.put(
            decision_url.format(agent_id=other.id), json={"decision": "APPROVE"}
        )
        assert forbidden.status_code == 403

        approved = await client.put(
            decision_url.format(agent_id=agent.id),
            json={"decision": "APPROVE", "reason": "Verified income"},
        )
        assert approved.status_code == 200
        assert approved.json()["loan"]["status"] == "APPROVED_BY_AGENT"
        assert approved.json()["loan"]["decision_reason"] == "Verified income"

        again = await client.put(
            decision_url.format(agent_id=agent.id), json={"decision": "REJECT"}
        )
        assert again.status_code == 409

        missing = await client.put(
            f"/api/v1/agents/{agent.id}/loans/LOAN-NOPE/decision", json={"decision": "REJECT"}
        )
        assert missing.status_code == 404

        assigned = await client.get(f"/api/v1/agents/{agent.id}/loans")
        assert [item["loan_id"] for item in assigned.json()] == [loan["loan_id"]]

    @pytest.mark.asyncio
    async def test_top_customers(self, client):
        for name in ("Alice", "Alice", "Bob"):
            await client.post(
                "/api/v1/loans",
                json=_application(customer_name=name, loan_amount="5000", loan_type="PERSONAL"),
            )
        await client.post("/api/v1/processing/run")

        resp = await client.get("/api/v1/loans/customers/top", params={"limit": 1})

        assert resp.json() == [{"customer_name": "Alice", "approved_loans": 2}]


class TestAgentEndpoints:
    @pytest.mark.asyncio
    async def test_create_list_and_conflict(self, client):
        payload = {
            "agent_id": "AGENT-100",
            "name": "Zoe Agent",
            "email": "zoe@example.com",
            "max_loan_amount": "80000",
            "specializations": ["AUTO"],
        }

        created = await client.post("/api/v1/agents", json=payload)
        duplicate = await client.post("/api/v1/agents", json=payload)
        listing = await client.get("/api/v1/agents")
        by_agent_id = await client.get("/api/v1/agents/by-agent-id/AGENT-100")

        assert created.status_code == 201
        assert created.json()["specializations"] == "AUTO"
        assert duplicate.status_code == 409
        assert [agent["agent_id"] for agent in listing.json()] == ["AGENT-100"]
        assert by_agent_id.json()["id"] == created.json()["id"]

    @pytest.mark.asyncio
    async def test_missing_agent_is_404(self, client):
        assert (await client.get(f"/api/v1/agents/{uuid.uuid4()}")).status_code == 404
        assert (await client.get("/api/v1/agents/by-agent-id/AGENT-NOPE")).status_code == 404


@pytest.mark.asyncio
async def test_health_reports_processing_state(client):
    resp = await client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["database"] == "healthy"
    assert body["processing"]["engine"] == "running"
    assert body["processing"]["scheduler"] == "stopped"
