"""Constants used in the project."""

from enum import Enum


class CdnStyle(Enum):
    """URL styles understood by the supported CDNs.

    Args:
        Enum (string): CDN style.
    """

    NPM = "npm"  # versioned, package.json aware (unpkg, skypack, esm.sh, jsdelivr)
    GITHUB = "github"  # path literal, no versions in the URL
    DENO = "deno"  # path literal, no package.json semantics
    OTHER = "other"


class SpecifierKind(Enum):
    """How an import specifier is addressed."""

    BARE = "bare"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class Loader(Enum):
    """Content-type hints handed back to the bundler."""

    TS = "ts"
    TSX = "tsx"
    CSS = "css"
    JSON = "json"
    DATAURL = "dataurl"
    TEXT = "text"
    FILE = "file"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_CDN_HOST = "https://unpkg.com"
    VIRTUAL_ROOT = "/node_modules"
    NAMESPACE = "cdn"
    LATEST = "latest"
    PACKAGE_JSON_FILE = "package.json"

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    MAX_REDIRECTS = 10
    USER_AGENT = "cdnresolve/0.1"
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    ENV_LOG_LEVEL = "CDNRESOLVE_LOG_LEVEL"
    ENV_DEFAULT_CDN = "CDNRESOLVE_DEFAULT_CDN"
    ENV_TIMEOUT = "CDNRESOLVE_TIMEOUT"

    # Scheme prefix -> origin. Order matters only for readability; lookups
    # are exact on the text before the first ':'.
    CDN_SCHEMES = {
        "skypack": "https://cdn.skypack.dev",
        "esm": "https://cdn.esm.sh",
        "esm.sh": "https://cdn.esm.sh",
        "unpkg": "https://unpkg.com",
        "jsdelivr": "https://cdn.jsdelivr.net/npm",
        "esm.run": "https://cdn.jsdelivr.net/npm",
        "jsdelivr.gh": "https://cdn.jsdelivr.net/gh",
        "deno": "https://deno.land/x",
        "github": "https://raw.githubusercontent.com",
    }

    # Known origin (host + base path) -> style. Longer bases first so that
    # cdn.jsdelivr.net/npm and cdn.jsdelivr.net/gh are told apart.
    KNOWN_ORIGINS = (
        ("cdn.jsdelivr.net/npm", CdnStyle.NPM),
        ("cdn.jsdelivr.net/gh", CdnStyle.GITHUB),
        ("raw.githubusercontent.com", CdnStyle.GITHUB),
        ("cdn.skypack.dev", CdnStyle.NPM),
        ("cdn.esm.sh", CdnStyle.NPM),
        ("unpkg.com", CdnStyle.NPM),
        ("deno.land/x", CdnStyle.DENO),
    )

    SCHEME_STYLES = {
        "skypack": CdnStyle.NPM,
        "esm": CdnStyle.NPM,
        "esm.sh": CdnStyle.NPM,
        "unpkg": CdnStyle.NPM,
        "jsdelivr": CdnStyle.NPM,
        "esm.run": CdnStyle.NPM,
        "jsdelivr.gh": CdnStyle.GITHUB,
        "github": CdnStyle.GITHUB,
        "deno": CdnStyle.DENO,
    }

    PATH_SUFFIX_VARIANTS = ("", "/index")
    EXTENSION_VARIANTS = ("", ".js", ".mjs", "/index.js", ".ts", ".tsx", ".cjs", ".d.ts")

    RESOLVE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js", ".css", ".json")
    DATAURL_EXTENSIONS = (
        ".png", ".jpg", ".jpeg", ".gif", ".webp", ".ico", ".bmp",
        ".ttf", ".otf", ".woff", ".woff2", ".eot",
    )
    TEXT_EXTENSIONS = (".svg", ".html", ".txt")

    # Manifest fields consulted for a bare sub-dependency's version range.
    DEPENDENCY_FIELDS = (
        "dependencies",
        "peerDependencies",
        "optionalDependencies",
        "devDependencies",
    )
    LEGACY_BROWSER_FIELDS = ("browser", "module", "main")
    LEGACY_FALLBACK_FIELDS = ("unpkg", "bin")
