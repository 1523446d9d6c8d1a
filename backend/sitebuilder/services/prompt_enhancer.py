"""Prompt enhancement for the image generation function.

Every style predicate is evaluated independently against the prompt; the
resulting set is then resolved through ``STYLE_PRECEDENCE``, a fixed
priority table. The winning style picks a language-specific prefix and
suffix and the final prompt is ``prefix + prompt + suffix``.
"""

import enum
import re


class Style(str, enum.Enum):
    ARTISTIC = "artistic"
    LOGO = "logo"
    RENDER_3D = "3d"
    MINIMAL = "minimal"
    FOOD = "food"
    PHOTO = "photo"
    GENERIC = "generic"


_DETECTORS: dict[Style, re.Pattern[str]] = {
    Style.ARTISTIC: re.compile(
        r"art|painting|drawing|sketch|illustration|cartoon|anime|watercolor|oil painting|abstract",
        re.IGNORECASE,
    ),
    Style.PHOTO: re.compile(
        r"photo|photograph|realistic|real|portrait|landscape|nature", re.IGNORECASE
    ),
    Style.FOOD: re.compile(
        r"food|dish|meal|recipe|cuisine|restaurant|plat|repas|nourriture", re.IGNORECASE
    ),
    Style.LOGO: re.compile(r"logo|icon|brand|emblem|badge", re.IGNORECASE),
    Style.RENDER_3D: re.compile(r"3d|render|cgi|digital art", re.IGNORECASE),
    Style.MINIMAL: re.compile(r"minimal|simple|clean|flat", re.IGNORECASE),
}

# First style present in this order wins; GENERIC when none match.
STYLE_PRECEDENCE: tuple[Style, ...] = (
    Style.ARTISTIC,
    Style.LOGO,
    Style.RENDER_3D,
    Style.MINIMAL,
    Style.FOOD,
    Style.PHOTO,
)

# (prefix, suffix) per language per style
STYLE_TEMPLATES: dict[str, dict[Style, tuple[str, str]]] = {
    "en": {
        Style.ARTISTIC: (
            "Beautiful artistic creation, masterful technique: ",
            ". Rich details, expressive style, museum quality artwork.",
        ),
        Style.LOGO: (
            "Professional logo design, clean vector style: ",
            ". Modern, memorable, scalable design with perfect symmetry.",
        ),
        Style.RENDER_3D: (
            "High-quality 3D render, cinematic lighting: ",
            ". Octane render quality, realistic materials, dramatic composition.",
        ),
        Style.MINIMAL: (
            "Clean minimal design: ",
            ". Simple, elegant, balanced composition with purposeful whitespace.",
        ),
        Style.FOOD: (
            "Professional food photography, appetizing presentation: ",
            ". Gourmet styling, perfect lighting, mouth-watering details, 8K quality.",
        ),
        Style.PHOTO: (
            "Professional photography, ultra high resolution: ",
            ". Perfect lighting, sharp focus, vivid colors, 8K quality.",
        ),
        Style.GENERIC: (
            "High quality, detailed image: ",
            ". Professional quality, vivid colors, excellent composition, 4K resolution.",
        ),
    },
    "fr": {
        Style.ARTISTIC: (
            "Belle création artistique, technique maîtrisée: ",
            ". Détails riches, style expressif, qualité musée.",
        ),
        Style.LOGO: (
            "Design de logo professionnel, style vectoriel épuré: ",
            ". Moderne, mémorable, design scalable avec symétrie parfaite.",
        ),
        Style.RENDER_3D: (
            "Rendu 3D haute qualité, éclairage cinématique: ",
            ". Qualité Octane render, matériaux réalistes, composition dramatique.",
        ),
        Style.MINIMAL: (
            "Design minimaliste épuré: ",
            ". Simple, élégant, composition équilibrée avec espaces blancs intentionnels.",
        ),
        Style.FOOD: (
            "Photographie culinaire professionnelle, présentation appétissante: ",
            ". Style gastronomique, éclairage parfait, détails savoureux, qualité 8K.",
        ),
        Style.PHOTO: (
            "Photographie professionnelle, ultra haute résolution: ",
            ". Éclairage parfait, mise au point nette, couleurs vives, qualité 8K.",
        ),
        Style.GENERIC: (
            "Image de haute qualité, détaillée: ",
            ". Qualité professionnelle, couleurs vives, excellente composition, résolution 4K.",
        ),
    },
}


def resolve_language(language: str | None) -> str:
    """``"en"`` selects English; anything else, including no value, selects French."""
    return "en" if language == "en" else "fr"


def detect_styles(prompt: str) -> set[Style]:
    """Return every style whose predicate matches the prompt."""
    return {style for style, pattern in _DETECTORS.items() if pattern.search(prompt)}


def classify_prompt(prompt: str) -> Style:
    matched = detect_styles(prompt)
    for style in STYLE_PRECEDENCE:
        if style in matched:
            return style
    return Style.GENERIC


def enhance_prompt(prompt: str, language: str | None = None) -> str:
    """Wrap the prompt with the prefix/suffix of its style in the given language."""
    prefix, suffix = STYLE_TEMPLATES[resolve_language(language)][classify_prompt(prompt)]
    return f"{prefix}{prompt}{suffix}"
