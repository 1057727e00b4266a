"""Unit tests for storage keys and URL construction."""

from s3_upload_action.core.upload.keys import build_file_key, build_qr_key
from s3_upload_action.core.upload.urls import public_url, replace_domain


class TestKeys:
    
    def test_file_key_uses_basename(self):
        assert build_file_key("pub/", "v1/", "/tmp/report.pdf") == "pub/v1/report.pdf"
    
    def test_relative_path(self):
        assert build_file_key("artifacts/", "abc/", "./README.md") == "artifacts/abc/README.md"
    
    def test_special_characters_are_kept_verbatim(self):
        assert build_file_key("r/", "d/", "dist/my app (1).zip") == "r/d/my app (1).zip"
    
    def test_qr_key_is_sibling_of_file(self):
        assert build_qr_key("pub/", "v1/") == "pub/v1/qr.png"


class TestPublicUrl:
    
    def test_virtual_hosted_pattern(self):
        url = public_url("my-bucket", "ap-northeast-1", "pub/v1/report.pdf")
        assert url == "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/v1/report.pdf"


class TestReplaceDomain:
    """Tests for alternate domain substitution."""
    
    def test_replaces_host_and_bucket_root(self):
        url = "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/v1/report.pdf"
        result = replace_domain(url, "my-bucket", "ap-northeast-1", "pub/", "cdn.example.com")
        assert result == "https://cdn.example.com/v1/report.pdf"
    
    def test_keeps_query_string(self):
        """Signed URLs keep their signature after the swap."""
        url = (
            "https://my-bucket.s3.ap-northeast-1.amazonaws.com/artifacts/x/a.txt"
            "?X-Amz-Expires=600&X-Amz-Signature=abc"
        )
        result = replace_domain(url, "my-bucket", "ap-northeast-1", "artifacts/", "files.example.com")
        assert result == "https://files.example.com/x/a.txt?X-Amz-Expires=600&X-Amz-Signature=abc"
    
    def test_empty_domain_is_noop(self):
        url = "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/a.txt"
        assert replace_domain(url, "my-bucket", "ap-northeast-1", "pub/", "") == url
    
    def test_unmatched_pattern_is_noop(self):
        """A different host (another region) is left as is."""
        url = "https://my-bucket.s3.us-west-2.amazonaws.com/pub/a.txt"
        assert replace_domain(url, "my-bucket", "ap-northeast-1", "pub/", "cdn.example.com") == url
