"""
CargoSnap Proxy — Upload, Field, Report, Share and Form Route Tests
=====================================================================

What:  Endpoint tests for the remaining proxied operations.
How:   Same approach as test_files_routes.py: mock_upstream stands in for the
       upstream client and records what each handler forwards.
"""

import pytest


class TestUploads:
    """POST /uploads"""

    @pytest.mark.asyncio
    async def test_upload_forwards_attachments(self, test_client, mock_upstream):
        forwarded = []

        async def read_parts(endpoint, method, params=None, files=None):
            # The spooled files are closed once the response has been sent
            for field, (filename, fileobj, content_type) in files:
                forwarded.append((field, (filename, fileobj.read(), content_type)))
            return [{"id": 1}, {"id": 2}]

        mock_upstream.side_effect = read_parts

        response = await test_client.post(
            "/uploads",
            data={"reference": "PO-1", "include_in_share": "true", "location": "Gate 3"},
            files=[
                ("files", ("front.jpg", b"front-bytes", "image/jpeg")),
                ("files", ("back.jpg", b"back-bytes", "image/jpeg")),
            ],
        )

        assert response.status_code == 200
        assert response.json() == [{"id": 1}, {"id": 2}]

        call = mock_upstream.await_args
        assert call.args == (
            "/uploads",
            "POST",
            {"reference": "PO-1", "include_in_share": "true", "location": "Gate 3"},
        )
        assert forwarded == [
            ("files", ("front.jpg", b"front-bytes", "image/jpeg")),
            ("files", ("back.jpg", b"back-bytes", "image/jpeg")),
        ]

    @pytest.mark.asyncio
    async def test_optional_flags_omitted_when_absent(self, test_client, mock_upstream):
        mock_upstream.return_value = [{"id": 1}]

        await test_client.post(
            "/uploads",
            data={"reference": "PO-1"},
            files=[("files", ("front.jpg", b"x", "image/jpeg"))],
        )

        data = mock_upstream.await_args.args[2]
        assert data["include_in_share"] is None
        assert data["location"] is None

    @pytest.mark.asyncio
    async def test_zero_files_rejected(self, test_client, mock_upstream):
        response = await test_client.post("/uploads", data={"reference": "PO-1"})

        assert response.status_code == 400
        assert response.json() == {"error": "Nenhum arquivo enviado."}
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_more_than_ten_files_rejected(self, test_client, mock_upstream):
        files = [("files", (f"p{i}.jpg", b"x", "image/jpeg")) for i in range(11)]

        response = await test_client.post("/uploads", data={"reference": "PO-1"}, files=files)

        assert response.status_code == 400
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_reference_rejected(self, test_client, mock_upstream):
        response = await test_client.post(
            "/uploads", files=[("files", ("front.jpg", b"x", "image/jpeg"))]
        )

        assert response.status_code == 400
        assert "reference" in response.json()["error"]
        mock_upstream.assert_not_awaited()


class TestFields:
    """POST /fields"""

    @pytest.mark.asyncio
    async def test_fields_forwarded_in_order(self, test_client, mock_upstream):
        mock_upstream.return_value = {"reference": "PO-1", "fields": []}
        fields = [{"name": "seal", "value": "A123"}, {"name": "weight", "value": 2450}]

        response = await test_client.post("/fields", json={"reference": "PO-1", "fields": fields})

        assert response.status_code == 200
        mock_upstream.assert_awaited_once_with("/fields/PO-1", "POST", {"fields": fields})

    @pytest.mark.asyncio
    async def test_reference_is_quoted_in_path(self, test_client, mock_upstream):
        mock_upstream.return_value = {}

        await test_client.post(
            "/fields", json={"reference": "PO 1/A", "fields": [{"name": "seal", "value": "x"}]}
        )

        assert mock_upstream.await_args.args[0] == "/fields/PO%201%2FA"

    @pytest.mark.asyncio
    async def test_empty_field_list_rejected(self, test_client, mock_upstream):
        response = await test_client.post("/fields", json={"reference": "PO-1", "fields": []})

        assert response.status_code == 400
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_reference_rejected(self, test_client, mock_upstream):
        response = await test_client.post(
            "/fields", json={"fields": [{"name": "seal", "value": "x"}]}
        )

        assert response.status_code == 400
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_field_without_value_rejected(self, test_client, mock_upstream):
        """A name alone is never forwarded as a null value."""
        response = await test_client.post(
            "/fields", json={"reference": "PO-1", "fields": [{"name": "seal"}]}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "O campo 'fields.0.value' é obrigatório."}
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_explicit_null_value_forwarded_as_sent(self, test_client, mock_upstream):
        mock_upstream.return_value = {}
        fields = [{"name": "seal", "value": None}]

        await test_client.post("/fields", json={"reference": "PO-1", "fields": fields})

        mock_upstream.assert_awaited_once_with("/fields/PO-1", "POST", {"fields": fields})


class TestReports:
    """POST /reports"""

    @pytest.mark.asyncio
    async def test_only_files_forwarded_when_no_options(self, test_client, mock_upstream):
        mock_upstream.return_value = {"id": "r-1", "status": "queued"}

        response = await test_client.post("/reports", json={"files": [101, 102]})

        assert response.status_code == 201
        assert response.json() == {"id": "r-1", "status": "queued"}
        mock_upstream.assert_awaited_once_with("/reports", "POST", {"files": [101, 102]})

    @pytest.mark.asyncio
    async def test_options_forwarded_with_wire_names(self, test_client, mock_upstream):
        mock_upstream.return_value = {"id": "r-2"}

        await test_client.post(
            "/reports",
            json={
                "files": ["101"],
                "template": "damage",
                "filename": "inspection.pdf",
                "async": True,
                "settings": {"photos_per_page": 4},
            },
        )

        mock_upstream.assert_awaited_once_with(
            "/reports",
            "POST",
            {
                "files": ["101"],
                "template": "damage",
                "filename": "inspection.pdf",
                "async": True,
                "settings": {"photos_per_page": 4},
            },
        )

    @pytest.mark.asyncio
    async def test_empty_file_list_rejected(self, test_client, mock_upstream):
        response = await test_client.post("/reports", json={"files": []})

        assert response.status_code == 400
        mock_upstream.assert_not_awaited()


class TestShare:
    """GET /share"""

    @pytest.mark.asyncio
    async def test_share_forwards_options(self, test_client, mock_upstream):
        mock_upstream.return_value = {"url": "https://share.test/abc", "expires": "2026-12-31T00:00:00"}

        response = await test_client.get(
            "/share",
            params={
                "reference": "PO-1",
                "expires": "2026-12-31T00:00:00",
                "lang": "pt",
                "direct_download": "true",
            },
        )

        assert response.status_code == 200
        assert response.json()["url"] == "https://share.test/abc"
        endpoint, method, params = mock_upstream.await_args.args
        assert (endpoint, method) == ("/share", "GET")
        assert params["reference"] == "PO-1"
        assert params["expires"] == "2026-12-31T00:00:00"
        assert params["lang"] == "pt"
        assert params["direct_download"] is True
        assert params["email"] is None

    @pytest.mark.asyncio
    async def test_missing_reference_rejected(self, test_client, mock_upstream):
        response = await test_client.get("/share")

        assert response.status_code == 400
        assert response.json() == {"error": "O campo 'reference' é obrigatório."}
        mock_upstream.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_expiry_rejected(self, test_client, mock_upstream):
        response = await test_client.get("/share", params={"reference": "PO-1", "expires": "soon"})

        assert response.status_code == 400
        mock_upstream.assert_not_awaited()


class TestForms:
    """GET /forms/{id}"""

    @pytest.mark.asyncio
    async def test_numeric_id_forwarded(self, test_client, mock_upstream):
        mock_upstream.return_value = {"id": 42, "name": "Damage survey"}

        response = await test_client.get("/forms/42", params={"limit": 10})

        assert response.status_code == 200
        endpoint, method, params = mock_upstream.await_args.args
        assert (endpoint, method) == ("/forms/42", "GET")
        assert params["limit"] == 10

    @pytest.mark.asyncio
    async def test_non_numeric_id_rejected(self, test_client, mock_upstream):
        response = await test_client.get("/forms/abc")

        assert response.status_code == 400
        assert "form_id" in response.json()["error"]
        mock_upstream.assert_not_awaited()
