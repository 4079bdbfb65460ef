"""Tests for the HTTP surface."""

from fastapi.testclient import TestClient

from shift_report.api.app import create_app
from shift_report.containers import AppContainer
from shift_report.services.relay import NotificationRelay
from tests.conftest import (
    FakeEmailClient,
    FakeSlackWebhookClient,
    InMemoryBlobStorage,
    InMemoryReportRepository,
    make_data_url,
)

STAFF_AUTH = {"Authorization": "Bearer staff-token"}
OTHER_AUTH = {"Authorization": "Bearer other-token"}
BOSS_AUTH = {"Authorization": "Bearer boss-token"}

RELAY_PAYLOAD = {
    "shift_stage": "오픈",
    "reporter_name": "구본록",
    "date": "2026. 10. 19.",
    "timestamp": "오전 09:10",
    "summary_for_boss": "오픈 완료",
    "issues": "",
    "photos": [{"url": "https://storage.test/a.jpg", "label": "테이블"}],
}


def test_health_endpoint(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_stages_endpoint_lists_catalog(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        stages = client.get("/stages").json()["stages"]

    assert [stage["stage"] for stage in stages] == ["오픈", "미들 타임", "마감"]
    closing = stages[2]
    assert len(closing["checklist"]) == 8
    assert closing["max_photos"] >= len(closing["photo_guides"])


def test_submit_report_and_notify(
    container: AppContainer,
    report_repository: InMemoryReportRepository,
    blob_storage: InMemoryBlobStorage,
    slack_client: FakeSlackWebhookClient,
    email_client: FakeEmailClient,
) -> None:
    body = {
        "shift_stage": "오픈",
        "busy_level": "바쁨",
        "summary_for_boss": "오픈 완료",
        "checklist": {"delivery_on": True},
        "photos": [make_data_url()],
    }

    with TestClient(create_app(container)) as client:
        response = client.post("/reports", json=body, headers=STAFF_AUTH)

    assert response.status_code == 201
    payload = response.json()
    assert payload["has_photo"] is True
    assert payload["photos"] == 1
    assert payload["skipped_photos"] == []
    assert report_repository.reports[0].reporter.uid == "staff-uid"
    assert len(blob_storage.objects) == 1
    assert len(slack_client.messages) == 1
    assert len(email_client.messages) == 1


def test_submit_requires_bearer_token(
    container: AppContainer, report_repository: InMemoryReportRepository
) -> None:
    body = {"shift_stage": "오픈", "summary_for_boss": "오픈 완료"}

    with TestClient(create_app(container)) as client:
        missing = client.post("/reports", json=body)
        unknown = client.post(
            "/reports", json=body, headers={"Authorization": "Bearer nope"}
        )

    assert missing.status_code == 401
    assert unknown.status_code == 401
    assert report_repository.reports == []


def test_submit_blank_summary_is_rejected(
    container: AppContainer, report_repository: InMemoryReportRepository
) -> None:
    body = {"shift_stage": "마감", "summary_for_boss": "  "}

    with TestClient(create_app(container)) as client:
        response = client.post("/reports", json=body, headers=STAFF_AUTH)

    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "missing_summary"
    assert report_repository.reports == []


def test_submit_store_failure_asks_to_retry(
    container: AppContainer, report_repository: InMemoryReportRepository
) -> None:
    report_repository.fail = True
    body = {"shift_stage": "오픈", "summary_for_boss": "오픈 완료"}

    with TestClient(create_app(container)) as client:
        response = client.post("/reports", json=body, headers=STAFF_AUTH)

    assert response.status_code == 503
    assert "다시 시도" in response.json()["detail"]


def test_report_history_is_scoped_to_owner(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        for auth, summary in ((STAFF_AUTH, "first"), (OTHER_AUTH, "second")):
            client.post(
                "/reports",
                json={"shift_stage": "오픈", "summary_for_boss": summary},
                headers=auth,
            )
        owned = client.get("/reports", headers=STAFF_AUTH).json()
        everything = client.get("/reports", headers=BOSS_AUTH).json()

    assert owned["scope"] == "owned"
    assert [report["summary_for_boss"] for report in owned["reports"]] == ["first"]
    assert everything["scope"] == "all"
    assert [report["summary_for_boss"] for report in everything["reports"]] == [
        "second",
        "first",
    ]


def test_relay_accepts_notification(
    container: AppContainer,
    slack_client: FakeSlackWebhookClient,
    email_client: FakeEmailClient,
) -> None:
    with TestClient(create_app(container)) as client:
        response = client.post("/api/send-slack", json=RELAY_PAYLOAD)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert slack_client.messages[0].blocks[0]["text"]["text"].endswith("오픈")
    assert len(email_client.messages) == 1


def test_relay_rate_limits_sixth_request(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        statuses = [
            client.post("/api/send-slack", json=RELAY_PAYLOAD).status_code
            for _ in range(6)
        ]
        other_source = client.post(
            "/api/send-slack",
            json=RELAY_PAYLOAD,
            headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
        )

    assert statuses == [200, 200, 200, 200, 200, 429]
    assert other_source.status_code == 200


def test_rate_limited_response_carries_retry_after(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        invalid = client.post("/api/send-slack", json={"photos": "x"})
        for _ in range(4):
            client.post("/api/send-slack", json=RELAY_PAYLOAD)
        response = client.post("/api/send-slack", json={"photos": "x"})

    assert invalid.status_code == 422
    assert response.status_code == 429
    assert response.json() == {"error": "Too many requests. Please try again later."}
    assert int(response.headers["retry-after"]) >= 1


def test_relay_without_webhook_is_configuration_error(
    container: AppContainer, email_client: FakeEmailClient
) -> None:
    container.notification_relay = NotificationRelay(
        slack_client=None, email_client=email_client
    )

    with TestClient(create_app(container)) as client:
        response = client.post("/api/send-slack", json=RELAY_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"error": "Server configuration error"}
    assert email_client.messages == []


def test_relay_rejects_other_methods(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        get = client.get("/api/send-slack")
        put = client.put("/api/send-slack", json=RELAY_PAYLOAD)

    assert get.status_code == 405
    assert put.status_code == 405
    assert get.json() == {"error": "Method not allowed"}
    assert get.headers["allow"] == "POST"


def test_relay_allows_cross_origin_calls(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        preflight = client.options(
            "/api/send-slack",
            headers={
                "Origin": "https://form.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        response = client.post(
            "/api/send-slack",
            json=RELAY_PAYLOAD,
            headers={"Origin": "https://form.example.com"},
        )

    assert preflight.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
