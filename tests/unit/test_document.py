"""
Unit tests for the Document resource.
"""

import io
from datetime import datetime, timezone

import pytest

from box_view.document import Document
from box_view.exceptions import BoxViewError
from box_view.models import DOCUMENT_STATUSES
from tests.helpers.network import make_response, sent_calls

DOCUMENT = {
    "type": "document",
    "id": "2da6cf9261824fb0a4fe532f94d14625",
    "status": "done",
    "name": "Leaves of Grass",
    "created_at": "2013-08-30T00:17:37.000Z",
}


class TestFromPayload:
    def test_fields(self, client):
        document = Document.from_payload(client, dict(DOCUMENT))

        assert document.id == DOCUMENT["id"]
        assert document.name == "Leaves of Grass"
        assert document.status == "done"
        assert document.created_at == datetime(2013, 8, 30, 0, 17, 37, tzinfo=timezone.utc)
        assert document.client is client

    def test_missing_id(self, client):
        with pytest.raises(BoxViewError) as exc_info:
            Document.from_payload(client, {"name": "x"})
        assert exc_info.value.code == "invalid_response"

    def test_to_dict(self, client):
        document = Document.from_payload(client, dict(DOCUMENT))
        assert document.to_dict() == {
            "id": DOCUMENT["id"],
            "name": "Leaves of Grass",
            "status": "done",
            "created_at": "2013-08-30T00:17:37.000Z",
        }


class TestFind:
    def test_returns_documents(self, client, http_client):
        http_client.request.return_value = make_response(
            200,
            json_data={
                "document_collection": {
                    "total_count": 2,
                    "entries": [DOCUMENT, {**DOCUMENT, "id": "other", "status": "queued"}],
                }
            },
        )

        documents = client.find_documents()

        assert [d.id for d in documents] == [DOCUMENT["id"], "other"]
        assert documents[1].status == "queued"
        assert sent_calls(http_client)[0]["url"] == "https://view-api.box.com/1/documents"

    def test_filters(self, client, http_client):
        http_client.request.return_value = make_response(
            200, json_data={"document_collection": {"entries": []}}
        )

        client.find_documents(
            limit=5,
            created_before=datetime(2014, 1, 1, tzinfo=timezone.utc),
            created_after="2013-12-31T19:00:00-05:00",
        )

        url = sent_calls(http_client)[0]["url"]
        assert "limit=5" in url
        assert "created_before=2014-01-01T00%3A00%3A00.000Z" in url
        assert "created_after=2014-01-01T00%3A00%3A00.000Z" in url

    def test_non_positive_limit_is_omitted(self, client, http_client):
        http_client.request.return_value = make_response(
            200, json_data={"document_collection": {"entries": []}}
        )

        client.find_documents(limit=0)

        assert "limit" not in sent_calls(http_client)[0]["url"]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"documents": []},
            {"document_collection": {}},
            {"document_collection": {"entries": None}},
            {"document_collection": []},
        ],
    )
    def test_invalid_response(self, client, http_client, payload):
        http_client.request.return_value = make_response(200, json_data=payload)

        with pytest.raises(BoxViewError) as exc_info:
            client.find_documents()

        assert exc_info.value.code == "invalid_response"


class TestGet:
    def test_requests_fields(self, client, http_client):
        http_client.request.return_value = make_response(200, json_data=DOCUMENT)

        document = client.get_document(DOCUMENT["id"])

        assert document.name == "Leaves of Grass"
        call = sent_calls(http_client)[0]
        assert call["method"] == "GET"
        assert call["url"] == (
            f"https://view-api.box.com/1/documents/{DOCUMENT['id']}"
            "?fields=id%2Ccreated_at%2Cname%2Cstatus"
        )

    def test_empty_id(self, client):
        with pytest.raises(ValueError):
            client.get_document("")

    def test_not_found(self, client, http_client):
        http_client.request.return_value = make_response(404)

        with pytest.raises(BoxViewError) as exc_info:
            client.get_document("missing")

        assert exc_info.value.code == "not_found"


class TestUpload:
    def test_url_upload(self, client, http_client):
        http_client.request.return_value = make_response(
            201, json_data={**DOCUMENT, "status": "queued"}
        )

        document = client.upload(
            "https://example.com/leaves.pdf",
            name="Leaves of Grass",
            thumbnails=["100x100", "200x200"],
            non_svg=True,
        )

        assert document.status == "queued"
        call = sent_calls(http_client)[0]
        assert call["method"] == "POST"
        assert call["url"] == "https://view-api.box.com/1/documents"
        assert call["json"] == {
            "name": "Leaves of Grass",
            "thumbnails": "100x100,200x200",
            "non_svg": "1",
            "url": "https://example.com/leaves.pdf",
        }

    def test_optional_fields_are_omitted(self, client, http_client):
        http_client.request.return_value = make_response(201, json_data=DOCUMENT)

        client.upload("http://example.com/a.doc")

        assert sent_calls(http_client)[0]["json"] == {"url": "http://example.com/a.doc"}

    def test_non_svg_false(self, client, http_client):
        http_client.request.return_value = make_response(201, json_data=DOCUMENT)

        client.upload("http://example.com/a.doc", non_svg=False)

        assert sent_calls(http_client)[0]["json"]["non_svg"] == "0"

    def test_stream_upload(self, client, http_client):
        http_client.request.return_value = make_response(201, json_data=DOCUMENT)
        stream = io.BytesIO(b"%PDF-1.4")
        stream.name = "leaves.pdf"

        client.upload(stream, name="Leaves", thumbnails="64x64")

        call = sent_calls(http_client)[0]
        assert call["url"] == "https://upload.view-api.box.com/1/documents"
        assert call["data"] == {"name": "Leaves", "thumbnails": "64x64"}
        assert call["files"]["file"][0] == "leaves.pdf"

    def test_path_upload(self, client, http_client, tmp_path):
        http_client.request.return_value = make_response(201, json_data=DOCUMENT)
        path = tmp_path / "leaves.pdf"
        path.write_bytes(b"%PDF-1.4")

        client.upload(path)

        call = sent_calls(http_client)[0]
        assert call["url"] == "https://upload.view-api.box.com/1/documents"
        assert call["files"]["file"][0] == "leaves.pdf"

    def test_missing_path(self, client, tmp_path):
        with pytest.raises(BoxViewError) as exc_info:
            client.upload(str(tmp_path / "missing.pdf"))

        assert exc_info.value.code == "invalid_file"

    def test_unsupported_source(self, client):
        with pytest.raises(BoxViewError) as exc_info:
            client.upload(12345)

        assert exc_info.value.code == "invalid_file"

    def test_upload_then_get_round_trip(self, client, http_client):
        http_client.request.side_effect = [
            make_response(201, json_data={**DOCUMENT, "status": "queued"}),
            make_response(200, json_data={**DOCUMENT, "status": "processing"}),
        ]

        uploaded = client.upload("https://example.com/leaves.pdf", name="Leaves of Grass")
        fetched = client.get_document(uploaded.id)

        assert fetched.name == uploaded.name
        assert fetched.status in DOCUMENT_STATUSES
        assert fetched is not uploaded


class TestInstanceOperations:
    @pytest.fixture
    def document(self, client):
        return Document.from_payload(client, dict(DOCUMENT))

    def test_update(self, document, http_client):
        http_client.request.return_value = make_response(
            200, json_data={**DOCUMENT, "name": "Song of Myself"}
        )

        assert document.update("Song of Myself") is True

        assert document.name == "Song of Myself"
        call = sent_calls(http_client)[0]
        assert call["method"] == "PUT"
        assert call["json"] == {"name": "Song of Myself"}

    def test_delete_empty_body(self, document, http_client):
        http_client.request.return_value = make_response(204)

        assert document.delete() is True

        call = sent_calls(http_client)[0]
        assert call["method"] == "DELETE"
        assert call["url"] == f"https://view-api.box.com/1/documents/{DOCUMENT['id']}"
        assert call["headers"]["Accept"] == "*/*"

    def test_delete_non_empty_body(self, document, http_client):
        http_client.request.return_value = make_response(200, content=b"still here")
        assert document.delete() is False

    def test_download_original(self, document, http_client):
        http_client.request.return_value = make_response(200, content=b"original")

        assert document.download() == b"original"
        assert sent_calls(http_client)[0]["url"].endswith(f"{DOCUMENT['id']}/content")

    @pytest.mark.parametrize("extension", ["pdf", ".pdf"])
    def test_download_extension(self, document, http_client, extension):
        http_client.request.return_value = make_response(200, content=b"%PDF")

        assert document.download(extension) == b"%PDF"
        assert sent_calls(http_client)[0]["url"].endswith("/content.pdf")

    def test_thumbnail(self, document, http_client):
        http_client.request.return_value = make_response(200, content=b"\x89PNG")

        assert document.thumbnail(100, 200) == b"\x89PNG"

        call = sent_calls(http_client)[0]
        assert call["method"] == "GET"
        assert call["url"].endswith("/thumbnail?height=200&width=100")
        assert call["headers"]["Accept"] == "*/*"

    def test_thumbnail_rejects_bad_size(self, document):
        with pytest.raises(ValueError):
            document.thumbnail(0, 100)

    def test_create_session(self, document, http_client):
        http_client.request.return_value = make_response(
            201, json_data={"id": "session-1", "expires_at": "2013-09-11T19:25:51.000Z"}
        )

        session = document.create_session(duration=10)

        assert session.id == "session-1"
        assert sent_calls(http_client)[0]["json"] == {
            "document_id": DOCUMENT["id"],
            "duration": "10",
        }
