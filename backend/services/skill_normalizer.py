"""Skill vocabulary canonicalization.

Maps the many spellings of a skill ("js", "JavaScript", "ECMAScript") onto one
canonical name using a curated synonym table. Unknown skills pass through in
their cleaned form so they can still be matched, at reduced precision.
Multi-word tokens resolve when they contain a known variant as whole words
("aws lambda" -> aws), never on fragments of a word.
"""

import re

# Canonical name -> accepted variant spellings.
# Canonical names must be lowercase alphanumerics separated by single spaces.
SKILL_VARIANTS: dict[str, tuple[str, ...]] = {
    # Programming languages
    "javascript": ("javascript", "js", "ecmascript", "es6", "vanilla js"),
    "typescript": ("typescript", "ts"),
    "python": ("python", "python3", "py"),
    "java": ("java", "java se", "j2ee"),
    "csharp": ("c#", "c sharp", "csharp", ".net", "dotnet", "asp.net", "asp.net core"),
    "cpp": ("c++", "cpp", "cplusplus"),
    "c": ("c", "ansi c"),
    "go": ("go", "golang"),
    "ruby": ("ruby",),
    "php": ("php",),
    "rust": ("rust",),
    "swift": ("swift",),
    "kotlin": ("kotlin",),
    "scala": ("scala",),
    "sql": ("sql", "t-sql", "pl/sql"),
    "solidity": ("solidity",),
    # Frontend
    "react": ("react", "reactjs", "react.js"),
    "react native": ("react native", "react-native"),
    "angular": ("angular", "angularjs", "angular.js"),
    "vue": ("vue", "vuejs", "vue.js"),
    "svelte": ("svelte", "sveltekit"),
    "nextjs": ("next", "nextjs", "next.js"),
    "html": ("html", "html5"),
    "css": ("css", "css3", "sass", "scss"),
    "tailwind": ("tailwind", "tailwindcss", "tailwind css"),
    "bootstrap": ("bootstrap",),
    # Backend
    "nodejs": ("node", "nodejs", "node.js"),
    "express": ("express", "expressjs", "express.js"),
    "django": ("django",),
    "flask": ("flask",),
    "fastapi": ("fastapi",),
    "spring": ("spring", "spring boot", "springboot"),
    "rails": ("rails", "ruby on rails", "ror"),
    "laravel": ("laravel",),
    "graphql": ("graphql",),
    "rest": ("rest", "restful", "rest api", "rest apis"),
    # Databases
    "mongodb": ("mongodb", "mongo"),
    "postgresql": ("postgresql", "postgres", "psql"),
    "mysql": ("mysql",),
    "redis": ("redis",),
    "sqlite": ("sqlite",),
    # Cloud & DevOps
    "aws": ("aws", "amazon web services"),
    "azure": ("azure", "microsoft azure"),
    "google cloud": ("google cloud", "gcp", "google cloud platform"),
    "docker": ("docker",),
    "kubernetes": ("kubernetes", "k8s"),
    "jenkins": ("jenkins",),
    "cicd": ("ci/cd", "cicd", "continuous integration"),
    "git": ("git", "github", "gitlab"),
    "linux": ("linux", "unix"),
    # Data & ML
    "machine learning": ("machine learning", "ml"),
    "deep learning": ("deep learning",),
    "tensorflow": ("tensorflow",),
    "pytorch": ("pytorch", "torch"),
    "pandas": ("pandas",),
    "numpy": ("numpy",),
    "data analysis": ("data analysis", "data analytics"),
    # Design
    "ux design": ("ux design", "ui/ux design", "ui/ux", "ux"),
    "figma": ("figma",),
    "adobe xd": ("adobe xd",),
    "sketch": ("sketch",),
    # Practices & other
    "agile": ("agile", "scrum", "kanban"),
    "project management": ("project management",),
    "blockchain": ("blockchain", "web3"),
    "cybersecurity": ("cybersecurity", "cyber security", "information security"),
}

# Shortest string that takes part in whole-word containment matching.
# Shorter tokens ("c", "go", "js") only ever match exactly.
MIN_FUZZY_LENGTH = 3

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def clean_token(token: str) -> str:
    """Lowercase, drop non-alphanumeric characters and collapse whitespace."""
    return " ".join(_NON_ALNUM_RE.sub("", token.lower()).split())


def _build_lookups() -> tuple[dict[str, str], dict[str, str]]:
    raw: dict[str, str] = {}
    cleaned: dict[str, str] = {}
    for canonical, variants in SKILL_VARIANTS.items():
        for variant in variants:
            raw.setdefault(" ".join(variant.lower().split()), canonical)
            key = clean_token(variant)
            if key:
                cleaned.setdefault(key, canonical)
    # Canonical names always resolve to themselves
    for canonical in SKILL_VARIANTS:
        raw[canonical] = canonical
        cleaned[canonical] = canonical
    return raw, cleaned


_RAW_LOOKUP, _CLEAN_LOOKUP = _build_lookups()

# Longest first so "react native" wins over "react" in containment matching
_FUZZY_VARIANTS: tuple[tuple[str, str], ...] = tuple(
    sorted(
        ((v, c) for v, c in _CLEAN_LOOKUP.items() if len(v) >= MIN_FUZZY_LENGTH),
        key=lambda item: (-len(item[0]), item[0]),
    )
)

# Flattened keyword vocabulary used when scanning raw resume text
SKILL_KEYWORDS: frozenset[str] = frozenset(
    variant.lower() for variants in SKILL_VARIANTS.values() for variant in variants
)


def canonical_of(token: str) -> str | None:
    """Return the canonical table entry for a token, or None if unknown."""
    raw = " ".join(token.lower().split())
    if raw in _RAW_LOOKUP:
        return _RAW_LOOKUP[raw]

    cleaned = clean_token(token)
    if not cleaned:
        return None
    if cleaned in _CLEAN_LOOKUP:
        return _CLEAN_LOOKUP[cleaned]

    # Containment is whole-word only: "networking" must not resolve via "net"
    if len(cleaned) >= MIN_FUZZY_LENGTH:
        padded = f" {cleaned} "
        for variant, canonical in _FUZZY_VARIANTS:
            padded_variant = f" {variant} "
            if padded_variant in padded or padded in padded_variant:
                return canonical
    return None


def normalize(token: str) -> str:
    """Canonicalize a skill token.

    Known spellings map to their canonical name; anything else is returned
    cleaned. Empty or punctuation-only input normalizes to "".
    """
    cleaned = clean_token(token)
    if not cleaned:
        return ""
    return canonical_of(token) or cleaned
