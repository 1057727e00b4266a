"""
Access URL construction.

Public objects get a deterministic virtual-hosted S3 URL. Alternate domains
(a CDN in front of the bucket, usually) are applied by plain text
replacement of the host plus bucket root, which only works while S3 keeps
this host pattern. That replacement is kept in replace_domain and nowhere
else.
"""


def s3_host(bucket: str, region: str) -> str:
    return f"{bucket}.s3.{region}.amazonaws.com"


def public_url(bucket: str, region: str, key: str) -> str:
    """Static URL of a public-read object."""
    return f"https://{s3_host(bucket, region)}/{key}"


def replace_domain(
    url: str,
    bucket: str,
    region: str,
    bucket_root: str,
    alternative_domain: str,
) -> str:
    """
    Swap the S3 host and bucket root for an alternate domain.
    
    `https://{bucket}.s3.{region}.amazonaws.com/{bucket_root}rest` becomes
    `https://{alternative_domain}/rest`. Query strings (signatures) are left
    alone. An empty alternative_domain, or a URL that doesn't contain the
    pattern, returns the URL unchanged.
    """
    if not alternative_domain:
        return url
    return url.replace(
        f"{s3_host(bucket, region)}/{bucket_root}",
        f"{alternative_domain}/",
    )
