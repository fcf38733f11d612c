"""
E2E tests for upload routes
"""

from botocore.exceptions import ClientError

from common import global_config
from tests.e2e.e2e_test_base import E2ETestBase


class TestDirectUpload(E2ETestBase):
    def test_missing_key_is_400_without_upstream_calls(self):
        response = self.client.post(
            "/api/upload",
            files={"file": ("cover.png", b"png-bytes", "image/png")},
            data={"bucket": "test-designs"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing required fields: file, bucket, or key"
        }
        self.storage.upload_file.assert_not_called()
        self.cdn.invalidate_quietly.assert_not_called()

    def test_missing_file_is_400(self):
        response = self.client.post(
            "/api/upload", data={"bucket": "test-designs", "key": "a.png"}
        )

        assert response.status_code == 400
        self.storage.upload_file.assert_not_called()

    def test_upload_is_encrypted(self):
        response = self.client.post(
            "/api/upload",
            files={"file": ("font.ttf", b"font-bytes", "font/ttf")},
            data={"bucket": "test-designs", "key": "fonts/font.ttf"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "key": "fonts/font.ttf",
            "bucket": "test-designs",
        }
        self.storage.upload_file.assert_called_once_with(
            b"font-bytes", "test-designs", "fonts/font.ttf", "font/ttf", encrypt=True
        )
        self.cdn.invalidate_quietly.assert_not_called()

    def test_image_in_cdn_bucket_schedules_invalidation(self):
        bucket = global_config.bucket("previews")

        response = self.client.post(
            "/api/upload",
            files={"file": ("preview.png", b"png-bytes", "image/png")},
            data={"bucket": bucket, "key": "previews/neon.png"},
        )

        assert response.status_code == 200
        self.cdn.invalidate_quietly.assert_called_once_with(["previews/neon.png"])

    def test_overridden_previews_bucket_still_invalidates(self, monkeypatch):
        monkeypatch.setattr(global_config, "S3_PREVIEWS_BUCKET", "staging-previews")

        response = self.client.post(
            "/api/upload",
            files={"file": ("preview.png", b"png-bytes", "image/png")},
            data={"bucket": "staging-previews", "key": "previews/neon.png"},
        )

        assert response.status_code == 200
        self.cdn.invalidate_quietly.assert_called_once_with(["previews/neon.png"])

    def test_storage_failure_is_500(self):
        self.storage.upload_file.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )

        response = self.client.post(
            "/api/upload",
            files={"file": ("a.png", b"x", "image/png")},
            data={"bucket": "test-designs", "key": "a.png"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to upload file"}


class TestPresignedUploads(E2ETestBase):
    def test_upload_url_requires_all_params(self):
        response = self.client.get("/api/upload?bucket=b&key=k")

        assert response.status_code == 400
        assert response.json() == {"error": "Bucket, key, and contentType are required"}

    def test_upload_url(self):
        self.storage.generate_upload_url.return_value = "https://signed/put"

        response = self.client.get(
            "/api/upload?bucket=test-designs&key=a.png&contentType=image/png"
        )

        assert response.json() == {
            "uploadUrl": "https://signed/put",
            "key": "a.png",
            "bucket": "test-designs",
        }
        self.storage.generate_upload_url.assert_called_once_with(
            "test-designs", "a.png", "image/png"
        )

    def test_presign_requires_file_name(self):
        response = self.client.get("/api/upload/presign?contentType=image/png")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameter: fileName"}

    def test_presign_requires_content_type(self):
        response = self.client.get("/api/upload/presign?fileName=big.psd")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameter: contentType"}

    def test_presign_defaults_to_uploads_bucket(self):
        self.storage.generate_upload_url.return_value = "https://signed/put"

        response = self.client.get(
            "/api/upload/presign?fileName=big.psd&contentType=image/vnd.adobe.photoshop"
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "uploadUrl": "https://signed/put",
            "fileUrl": "https://test-uploads.s3.eu-north-1.amazonaws.com/uploads/big.psd",
            "key": "uploads/big.psd",
            "bucket": "test-uploads",
        }
        self.storage.generate_upload_url.assert_called_once_with(
            "test-uploads",
            "uploads/big.psd",
            "image/vnd.adobe.photoshop",
            expires_in=self.storage.expiry.direct_upload,
        )
