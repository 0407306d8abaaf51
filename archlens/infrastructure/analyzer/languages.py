"""Extension-based language classification."""

OTHER = "Other"
UNKNOWN_EXTENSION = "unknown"

# Language -> extensions (without dot, lowercase)
LANGUAGE_EXTENSIONS: dict[str, list[str]] = {
    "TypeScript": ["ts", "tsx"],
    "JavaScript": ["js", "jsx", "mjs", "cjs"],
    "Python": ["py"],
    "Go": ["go"],
    "Rust": ["rs"],
    "Ruby": ["rb"],
    "Java": ["java"],
    "C++": ["cpp", "cc", "cxx", "hpp"],
    "C": ["c", "h"],
    "C#": ["cs"],
    "PHP": ["php"],
    "HTML": ["html", "htm"],
    "CSS": ["css", "scss"],
    "JSON": ["json"],
    "Markdown": ["md"],
    "YAML": ["yaml", "yml"],
}

_EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ext: language for language, extensions in LANGUAGE_EXTENSIONS.items() for ext in extensions
}


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1] or path


def detect_extension(path: str) -> str:
    """Text after the last dot of the final path segment, lowercased."""
    name = basename(path)
    if "." not in name:
        return UNKNOWN_EXTENSION
    return name.rsplit(".", 1)[-1].lower() or UNKNOWN_EXTENSION


def detect_language(extension: str) -> str:
    return _EXTENSION_TO_LANGUAGE.get(extension.lower(), OTHER)
