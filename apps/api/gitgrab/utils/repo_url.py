from urllib.parse import urlparse

GITHUB_HOSTS = ("github.com", "www.github.com")

def repo_path_segments(raw: str) -> list[str]:
    """Path segments of a repo URL, without a trailing '/' or '.git'."""
    s = raw.strip()

    # If user passes without scheme, assume https
    if "://" not in s:
        s = "https://" + s

    path = (urlparse(s).path or "").strip().rstrip("/")
    if path.endswith(".git"):
        path = path[:-4]
    return [p for p in path.split("/") if p]


def canonicalize_repo_url(raw: str) -> str:
    """
    Canonical GitHub repo URL:
    - forces https
    - strips trailing '/'
    - strips '.git'
    - keeps only <host>/<owner>/<repo>
    """
    s = raw.strip()
    if "://" not in s:
        s = "https://" + s

    host = (urlparse(s).hostname or "").lower()
    if host == "www.github.com":
        host = "github.com"

    # keep only first two segments: /owner/repo
    parts = repo_path_segments(s)[:2]
    path = "/" + "/".join(parts)

    return f"https://{host}{path}".rstrip("/")


def is_github_url(canonical_url: str) -> bool:
    return (urlparse(canonical_url).hostname or "").lower() in GITHUB_HOSTS


def parse_github_owner_repo(canonical_url: str) -> tuple[str, str]:
    u = urlparse(canonical_url)
    parts = [p for p in (u.path or "").split("/") if p]
    if len(parts) < 2:
        raise ValueError("Invalid GitHub repo URL (missing owner/repo)")
    return parts[0], parts[1]
