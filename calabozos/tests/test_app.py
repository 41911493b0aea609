import json
import unittest
from unittest.mock import MagicMock, patch

import requests
from fastapi.testclient import TestClient

from calabozos.app import create_app
from calabozos.db import InMemoryClassRepository
from calabozos.dependencies import get_repository, get_upstream_client
from upstream.dnd_api import UpstreamClient

BASE_URL = "https://dnd.example.test/api"
PREFIX = "/api/calabozos"


def make_response(status_code, body, reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = BASE_URL
    response._content = json.dumps(body).encode("utf-8")
    return response


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.upstream = {}
        session = MagicMock()
        session.get.side_effect = lambda url, timeout: self.upstream.get(
            url, make_response(404, {"error": "Not found"}, reason="Not Found")
        )
        self.repository = InMemoryClassRepository()

        app = create_app()
        app.dependency_overrides[get_upstream_client] = lambda: UpstreamClient(
            base_url=BASE_URL, session=session
        )
        app.dependency_overrides[get_repository] = lambda: self.repository
        self.client = TestClient(app)

    def serve(self, path, status_code, body, reason="OK"):
        self.upstream[f"{BASE_URL}{path}"] = make_response(status_code, body, reason)

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_list_classes_syncs_and_returns_records(self):
        self.serve(
            "/classes",
            200,
            {
                "count": 2,
                "results": [
                    {"index": "wizard", "name": "Wizard", "url": "/api/classes/wizard"},
                    7,
                ],
            },
        )
        response = self.client.get(f"{PREFIX}/classes")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "success")
        classes = payload["data"]["classes"]
        self.assertEqual(len(classes), 1)
        self.assertEqual(classes[0]["index"], "wizard")
        self.assertEqual(len(self.repository.all()), 1)

        stored = self.client.get(f"{PREFIX}/stored-classes")
        self.assertEqual(stored.status_code, 200)
        self.assertEqual(stored.json()["data"]["classes"][0]["name"], "Wizard")

    def test_class_named_stored_reaches_upstream_detail(self):
        self.serve("/classes/stored", 200, {"index": "stored"})
        response = self.client.get(f"{PREFIX}/classes/stored")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"class": {"index": "stored"}})

    def test_list_classes_upstream_failure_is_500(self):
        self.serve("/classes", 503, {}, reason="Service Unavailable")
        response = self.client.get(f"{PREFIX}/classes")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {
                "status": "error",
                "message": "Failed to retrieve classes: 503 Service Unavailable",
            },
        )

    def test_list_classes_invalid_payload_is_500(self):
        self.serve("/classes", 200, {"count": 0})
        response = self.client.get(f"{PREFIX}/classes")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["status"], "error")
        self.assertEqual(self.repository.all(), [])

    def test_class_detail(self):
        self.serve("/classes/wizard", 200, {"index": "wizard", "hit_die": 6})
        response = self.client.get(f"{PREFIX}/classes/wizard")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"status": "success", "data": {"class": {"index": "wizard", "hit_die": 6}}},
        )

    def test_sub_resources_are_keyed_by_name(self):
        for name in (
            "spellcasting",
            "multiclassing",
            "subclasses",
            "spells",
            "features",
            "proficiencies",
        ):
            self.serve(f"/classes/bard/{name}", 200, {"resource": name})
            response = self.client.get(f"{PREFIX}/classes/bard/{name}")
            self.assertEqual(response.status_code, 200, name)
            self.assertEqual(response.json()["data"], {name: {"resource": name}})

    def test_unknown_class_is_404(self):
        response = self.client.get(f"{PREFIX}/classes/nope/spellcasting")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["status"], "error")

    def test_fragment_in_index_does_not_reach_class_detail(self):
        self.serve("/classes/wizard", 200, {"index": "wizard"})
        response = self.client.get(f"{PREFIX}/classes/wizard%23x/spells")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["status"], "error")

    def test_blank_index_is_400(self):
        response = self.client.get(f"{PREFIX}/classes/%20%20")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["status"], "error")

    def test_detail_upstream_failure_is_500(self):
        self.serve("/classes/wizard/spells", 500, {}, reason="Internal Server Error")
        response = self.client.get(f"{PREFIX}/classes/wizard/spells")
        self.assertEqual(response.status_code, 500)
        self.assertIn("500 Internal Server Error", response.json()["message"])

    @patch("calabozos.dependencies.get_settings")
    def test_api_token_required_when_configured(self, mock_settings):
        mock_settings.return_value = type("Settings", (), {"api_token": "s3cret"})()
        self.serve("/classes/wizard", 200, {"index": "wizard"})

        denied = self.client.get(f"{PREFIX}/classes/wizard")
        self.assertEqual(denied.status_code, 401)
        self.assertEqual(denied.json()["status"], "error")

        wrong = self.client.get(
            f"{PREFIX}/classes/wizard", headers={"Authorization": "Bearer s3creX"}
        )
        self.assertEqual(wrong.status_code, 401)

        allowed = self.client.get(
            f"{PREFIX}/classes/wizard", headers={"Authorization": "Bearer s3cret"}
        )
        self.assertEqual(allowed.status_code, 200)


if __name__ == "__main__":
    unittest.main()
