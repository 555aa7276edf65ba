"""
Defaults shared by the CLI and the dispatcher. Nothing in here is mutated at runtime;
callers that need different values pass them explicitly through `VendorConfig`.
"""

# region ---[ Target and Scratch Paths ]---

DEFAULT_DIR = "./vndr"

SCRATCH_PREFIX = "vndr-"

VCS_METADATA_DIR = ".git"

# endregion ---[ Target and Scratch Paths ]---

# region ---[ Remote Endpoints ]---

GITHUB_BASE = "https://github.com"
RAW_GITHUB_BASE = "https://raw.githubusercontent.com"

# Hosts that receive the GITHUB_TOKEN bearer header, if one is set.
GITHUB_HOSTS: tuple[str, ...] = (
    "github.com",
    "raw.githubusercontent.com",
    "codeload.github.com",
    "api.github.com",
)

URL_SCHEMES: tuple[str, ...] = ("http://", "https://")

DEFAULT_HTTP_TIMEOUT = 60.0

# endregion ---[ Remote Endpoints ]---

# region ---[ External Tools ]---

GIT_EXECUTABLE = "git"
NPM_EXECUTABLE = "npm"
NPM_DEPENDENCY_DIR = "node_modules"

# endregion ---[ External Tools ]---
