"""API tests for /api/inquiries."""

import pytest

from tests.helpers import PORTAL_QUESTION


def submit(client, message, **extra):
    payload = {"message": message, "sender_name": "Sam Student", **extra}
    response = client.post("/api/inquiries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestSubmitInquiry:
    def test_portal_question_is_answered_automatically(self, client, templates_by_title, categories_by_name):
        portal = templates_by_title["Assignment Portal Access"]

        inquiry = submit(client, PORTAL_QUESTION, sender_email="sam@example.edu")

        assert inquiry["status"] == "responded"
        assert inquiry["is_automated"] is True
        assert inquiry["response_template_id"] == portal["id"]
        assert inquiry["response_message"] == portal["content"]
        assert inquiry["confidence"] == 1.0
        assert inquiry["response_time"] >= 0
        assert inquiry["responded_at"] is not None
        assert inquiry["category_id"] == categories_by_name["Technical Support"]["id"]

        updated = client.get(f"/api/response-templates/{portal['id']}").json()
        assert updated["usage_count"] == 848

    def test_unmatched_message_stays_pending(self, client, categories_by_name):
        inquiry = submit(client, "xyz")

        assert inquiry["status"] == "pending"
        assert inquiry["is_automated"] is False
        assert inquiry["response_template_id"] is None
        assert inquiry["confidence"] is None
        assert inquiry["category_id"] == categories_by_name["General"]["id"]

    def test_inactive_template_is_not_used(self, client, templates_by_title):
        portal = templates_by_title["Assignment Portal Access"]
        client.put(f"/api/response-templates/{portal['id']}", json={"is_active": False})

        inquiry = submit(client, PORTAL_QUESTION)

        assert inquiry["response_template_id"] == templates_by_title["General Greeting"]["id"]
        assert client.get(f"/api/response-templates/{portal['id']}").json()["usage_count"] == 847

    def test_message_is_trimmed(self, client):
        inquiry = submit(client, "   xyz   ")
        assert inquiry["message"] == "xyz"

    def test_explicit_category_skips_categorization(self, client, categories_by_name):
        academic_id = categories_by_name["Academic"]["id"]

        inquiry = submit(client, PORTAL_QUESTION, category_id=academic_id)

        assert inquiry["category_id"] == academic_id
        assert inquiry["status"] == "responded"

    def test_unknown_category_is_rejected(self, client):
        response = client.post(
            "/api/inquiries",
            json={"message": "hello", "sender_name": "Sam", "category_id": "missing"}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("payload", [
        {"message": "", "sender_name": "Sam"},
        {"message": "   ", "sender_name": "Sam"},
        {"message": "hello"},
    ])
    def test_invalid_payload(self, client, payload):
        assert client.post("/api/inquiries", json=payload).status_code == 422


class TestListInquiries:
    def test_newest_first_with_limit(self, client):
        first = submit(client, "first question xyz")
        second = submit(client, "second question xyz")
        third = submit(client, "third question xyz")

        all_ids = [i["id"] for i in client.get("/api/inquiries").json()]
        assert all_ids == [third["id"], second["id"], first["id"]]

        limited = client.get("/api/inquiries", params={"limit": 2}).json()
        assert [i["id"] for i in limited] == [third["id"], second["id"]]

    def test_get_single_inquiry(self, client):
        inquiry = submit(client, "xyz")

        response = client.get(f"/api/inquiries/{inquiry['id']}")

        assert response.status_code == 200
        assert response.json()["sender_name"] == "Sam Student"
        assert client.get("/api/inquiries/missing").status_code == 404


class TestSatisfaction:
    def test_rate_inquiry(self, client):
        inquiry = submit(client, PORTAL_QUESTION)

        response = client.put(f"/api/inquiries/{inquiry['id']}/satisfaction", json={"score": 4})

        assert response.status_code == 200
        assert response.json()["satisfaction_score"] == 4.0

    @pytest.mark.parametrize("score", [0, 6, 5.5])
    def test_score_out_of_range(self, client, score):
        inquiry = submit(client, PORTAL_QUESTION)

        response = client.put(f"/api/inquiries/{inquiry['id']}/satisfaction", json={"score": score})

        assert response.status_code == 400

    def test_unknown_inquiry(self, client):
        response = client.put("/api/inquiries/missing/satisfaction", json={"score": 3})
        assert response.status_code == 404


class TestEscalation:
    def test_escalate_pending_inquiry(self, client):
        inquiry = submit(client, "xyz")

        response = client.post(f"/api/inquiries/{inquiry['id']}/escalate")

        assert response.status_code == 200
        assert response.json()["status"] == "escalated"

    def test_escalation_is_not_repeatable(self, client):
        inquiry = submit(client, "xyz")
        client.post(f"/api/inquiries/{inquiry['id']}/escalate")

        response = client.post(f"/api/inquiries/{inquiry['id']}/escalate")

        assert response.status_code == 409

    def test_responded_inquiry_cannot_be_escalated(self, client):
        inquiry = submit(client, PORTAL_QUESTION)

        response = client.post(f"/api/inquiries/{inquiry['id']}/escalate")

        assert response.status_code == 409
        stored = client.get(f"/api/inquiries/{inquiry['id']}").json()
        assert stored["status"] == "responded"

    def test_unknown_inquiry(self, client):
        assert client.post("/api/inquiries/missing/escalate").status_code == 404


class TestAnalyze:
    def test_analyze_previews_match_without_storing(self, client, templates_by_title, categories_by_name):
        response = client.post("/api/inquiries/analyze", json={"message": PORTAL_QUESTION})

        assert response.status_code == 200
        body = response.json()
        assert body["keywords"] == ["access", "assignment", "portal"]
        assert body["category_id"] == categories_by_name["Technical Support"]["id"]
        assert body["match"]["title"] == "Assignment Portal Access"
        assert body["match"]["confidence"] == 1.0
        assert body["match"]["matched_keywords"] == ["assignment", "portal", "access", "how"]
        assert body["similarity"] is None

        assert client.get("/api/inquiries").json() == []
        portal = templates_by_title["Assignment Portal Access"]
        assert client.get(f"/api/response-templates/{portal['id']}").json()["usage_count"] == 847

    def test_analyze_without_match(self, client):
        body = client.post("/api/inquiries/analyze", json={"message": "xyz"}).json()

        assert body["match"] is None
        assert body["keywords"] == []

    def test_compare_to_reports_similarity(self, client):
        response = client.post(
            "/api/inquiries/analyze",
            json={"message": "reset my password", "compare_to": "reset password"}
        )

        assert response.json()["similarity"] == pytest.approx(2 / 3)
