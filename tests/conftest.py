"""Shared fixtures: an in-memory stand-in for the form API."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from smartform.api_client import Credentials, SmartFormClient

TOKEN = "owner-token"


class FakeFormApi:
    """Answers the form API routes from memory and records every request."""

    def __init__(self):
        self.forms: dict[str, dict] = {}
        self.submissions: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: tuple[int, str] | None = None

    def add_form(self, slug: str, fields: list[dict], title: str = "T", description: str = "") -> dict:
        doc = {
            "_id": f"id-{slug}",
            "title": title,
            "description": description,
            "fields": fields,
            "share_slug": slug,
            "sheet_name": f"{title}-1",
        }
        self.forms[slug] = doc
        self.submissions.setdefault(slug, [])
        return doc

    def _authorized(self, request: httpx.Request) -> bool:
        return request.headers.get("authorization") == f"Bearer {TOKEN}"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            status, detail = self.fail_with
            return httpx.Response(status, json={"detail": detail})

        path = request.url.path
        parts = path.strip("/").split("/")

        if path == "/api/forms":
            if not self._authorized(request):
                return httpx.Response(401, json={"detail": "Invalid token"})
            if request.method == "POST":
                body = json.loads(request.content)
                slug = f"{body['title'].lower().replace(' ', '-')}-{len(self.forms) + 1}"
                self.add_form(slug, body["fields"], body["title"], body.get("description") or "")
                return httpx.Response(200, json={
                    "form_id": f"id-{slug}",
                    "share_url": f"http://localhost:3000/f/{slug}",
                    "sheet_name": f"{body['title']}-1",
                })
            return httpx.Response(200, json={"forms": list(self.forms.values())})

        if parts[:3] == ["api", "forms", "by-slug"]:
            doc = self.forms.get(parts[3])
            if doc is None:
                return httpx.Response(404, json={"detail": "Form not found"})
            return httpx.Response(200, json=doc)

        if len(parts) >= 4 and parts[:2] == ["api", "forms"]:
            slug, action = parts[2], "/".join(parts[3:])
            if slug not in self.forms:
                return httpx.Response(404, json={"detail": "Form not found"})
            if action == "submit":
                content_type = request.headers.get("content-type", "")
                if content_type.startswith("application/json"):
                    data = json.loads(request.content)["data"]
                elif content_type.startswith("application/x-www-form-urlencoded"):
                    data = {k: v if len(v) > 1 else v[0] for k, v in parse_qs(request.content.decode()).items()}
                else:
                    data = {"_multipart": request.content.decode("latin-1")}
                record = {"_id": f"sub-{len(self.submissions[slug]) + 1}", "data": data}
                self.submissions[slug].append(record)
                return httpx.Response(200, json={"status": "ok", "submission_id": record["_id"]})
            if action == "qr":
                return httpx.Response(200, content=b"\x89PNG fake", headers={"content-type": "image/png"})
            if not self._authorized(request):
                return httpx.Response(401, json={"detail": "Invalid token"})
            if action == "analytics":
                subs = self.submissions[slug]
                return httpx.Response(200, json={"count": len(subs), "recent": list(reversed(subs))[:5]})
            if action == "export/csv":
                return httpx.Response(200, text="timestamp,f1\n,x@y.com\n", headers={"content-type": "text/csv"})

        return httpx.Response(404, text="Not Found")


@pytest.fixture
def fake_api() -> FakeFormApi:
    return FakeFormApi()


@pytest.fixture
def client(fake_api) -> SmartFormClient:
    return SmartFormClient(
        base_url="http://api.test",
        credentials=Credentials(id_token=TOKEN),
        public_base_url="http://localhost:3000",
        transport=httpx.MockTransport(fake_api),
    )
