from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the default resolution surface of the extractor: recognized
extensions, exclusion rules, framework aliases, conventional project folders,
root markers and the binary/language lookup tables used by the renderers.
"""

from typing import Dict, List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_MAX_CONTENT_LENGTH = 100000

# Hard read ceiling is a multiple of the content-length budget
CONTENT_READ_MULTIPLIER = 4

OUTPUT_FORMATS: Tuple[str, ...] = ("tree", "list", "json", "content")
DEFAULT_OUTPUT_FORMAT = "tree"
DEFAULT_MODEL_KEY = "gpt-4o"

# -----------------------------------------------------------------------------
# RESOLUTION DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_EXTENSIONS: List[str] = [
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".json",
    ".mjs",
    ".cjs",
    ".d.ts",
    ".svelte",
]

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"node_modules",
    r"\.d\.ts$",
    r"\.spec\.ts$",
    r"\.test\.ts$",
    r"\.spec\.js$",
    r"\.test\.js$",
    r"dist/",
    r"build/",
    r"coverage/",
    r"\.git/",
    r"\.vscode/",
    r"\.idea/",
]

# SvelteKit routing and library aliases
DEFAULT_ALIASES: Dict[str, str] = {
    "$lib": "src/lib",
    "$app": "@sveltejs/kit",
    "$env": "@sveltejs/kit",
    "$service-worker": "@sveltejs/kit",
}

# Alias targets that name a framework runtime instead of a project folder
BUILTIN_ALIAS_TARGETS: Tuple[str, ...] = ("@sveltejs/kit",)

PROJECT_ABSOLUTE_PREFIXES: Tuple[str, ...] = (
    "src/",
    "app/",
    "lib/",
    "libs/",
    "packages/",
    "modules/",
    "components/",
    "services/",
    "utils/",
    "helpers/",
    "shared/",
    "core/",
    "common/",
    "config/",
    "assets/",
    "styles/",
    "types/",
    "interfaces/",
    "models/",
    "entities/",
    "dtos/",
    "guards/",
    "middleware/",
    "decorators/",
    "pipes/",
    "filters/",
    "interceptors/",
    "controllers/",
    "providers/",
    "repositories/",
    "schemas/",
)

# Files that wrap script regions inside markup
TEMPLATE_COMPOSITE_EXTENSIONS: Tuple[str, ...] = (".svelte", ".vue")

# -----------------------------------------------------------------------------
# PROJECT ROOT DETECTION
# -----------------------------------------------------------------------------

ROOT_MARKERS: Tuple[str, ...] = (
    "package.json",
    "svelte.config.js",
    "vite.config.js",
    "tsconfig.json",
    "angular.json",
    "next.config.js",
    "webpack.config.js",
    ".git",
    "yarn.lock",
    "package-lock.json",
)

# -----------------------------------------------------------------------------
# CONTENT GATING AND PRESENTATION
# -----------------------------------------------------------------------------

BINARY_EXTENSIONS: frozenset = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".svg", ".pdf",
    ".zip", ".tar", ".gz", ".rar", ".7z",
    ".exe", ".dll", ".so", ".dylib",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".avi", ".mov", ".webm",
    ".node", ".bin", ".lock",
})

LANGUAGE_MAP: Dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".svelte": "svelte",
    ".json": "json",
    ".md": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".sql": "sql",
    ".sh": "bash",
    ".py": "python",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".h": "c",
    ".vue": "vue",
}

# Node core modules never live under node_modules
NODE_BUILTIN_MODULES: frozenset = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
})
