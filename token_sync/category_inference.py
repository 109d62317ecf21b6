"""
Category Inference
Assigns each design token one of the eight semantic categories from its
value shape first and its name/collection path second
"""

import re
from typing import Callable, List, NamedTuple, Optional

from models.design_tokens import Category, DesignToken, TokenType

SPACING_TERMS = ("space", "spacing", "gap", "padding", "margin")
SIZING_TERMS = ("size", "width", "height", "line height", "lineheight")
LETTER_SPACING_TERMS = ("letter spacing", "letterspacing", "letter-spacing")
TYPOGRAPHY_TERMS = (
    "font", "typography", "text", "body", "header", "display",
    "label", "title", "link", "weight", "family",
) + LETTER_SPACING_TERMS

# Leading numeric prefix, read the way a lenient float parser reads "12px"
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class CategoryRule(NamedTuple):
    """A predicate and the category it assigns when it matches"""
    name: str
    matches: Callable[["TokenFacts"], bool]
    category: Category


class TokenFacts(NamedTuple):
    """Lowercased views of a token that the rules test against"""
    value: str
    full_path: str
    search_text: str
    is_style: bool


def _contains_any(text: str, terms) -> bool:
    return any(term in text for term in terms)


def is_numeric_value(value: str) -> bool:
    """True when the value starts with a finite number ("4", "0.5", "12px")"""
    return _NUMERIC_PREFIX.match(value) is not None


def _is_font_descriptor(facts: TokenFacts) -> bool:
    return facts.value.startswith("font(") or "font(family" in facts.value


def _is_color_literal(facts: TokenFacts) -> bool:
    return facts.value.startswith(("#", "rgb", "rgba"))


# Order is part of the contract: the first matching rule wins.
VALUE_RULES: List[CategoryRule] = [
    CategoryRule("font-descriptor", _is_font_descriptor, Category.TYPOGRAPHY),
    CategoryRule(
        "color-literal-on-spacing-path",
        lambda f: _is_color_literal(f) and _contains_any(f.full_path, SPACING_TERMS),
        Category.SPACING,
    ),
    CategoryRule("color-literal", _is_color_literal, Category.COLOR),
    CategoryRule(
        "numeric-letter-spacing",
        lambda f: is_numeric_value(f.value) and _contains_any(f.full_path, LETTER_SPACING_TERMS),
        Category.TYPOGRAPHY,
    ),
    CategoryRule(
        "numeric-spacing",
        lambda f: is_numeric_value(f.value)
        and _contains_any(f.full_path, SPACING_TERMS + ("/ce/space",)),
        Category.SPACING,
    ),
    CategoryRule(
        "numeric-sizing",
        lambda f: is_numeric_value(f.value) and _contains_any(f.full_path, SIZING_TERMS),
        Category.SIZING,
    ),
    # Bare numbers with no naming hint land in Spacing. "Font/Tracking/x" = "0"
    # ends up here too since tracking is not one of the letter-spacing phrasings.
    CategoryRule("numeric-default", lambda f: is_numeric_value(f.value), Category.SPACING),
]

NAME_RULES: List[CategoryRule] = [
    CategoryRule("radius", lambda f: _contains_any(f.search_text, ("radius", "border-radius")), Category.RADIUS),
    CategoryRule("shadow", lambda f: _contains_any(f.search_text, ("shadow", "elevation")), Category.SHADOW),
    CategoryRule("opacity", lambda f: _contains_any(f.search_text, ("opacity", "alpha")), Category.OPACITY),
    CategoryRule("z-index", lambda f: "z-index" in f.search_text, Category.ELEVATION),
    CategoryRule("typography", lambda f: _contains_any(f.search_text, TYPOGRAPHY_TERMS), Category.TYPOGRAPHY),
    CategoryRule(
        "spacing",
        lambda f: _contains_any(f.search_text, SPACING_TERMS)
        and not _contains_any(f.search_text, ("letter spacing", "letterspacing")),
        Category.SPACING,
    ),
    CategoryRule("sizing", lambda f: _contains_any(f.search_text, SIZING_TERMS), Category.SIZING),
    CategoryRule(
        "style-color",
        lambda f: f.is_style and _contains_any(f.search_text, ("color", "fill", "bg")),
        Category.COLOR,
    ),
    CategoryRule(
        "style-typography",
        lambda f: f.is_style and _contains_any(f.search_text, ("text", "font")),
        Category.TYPOGRAPHY,
    ),
]

DEFAULT_CATEGORY = Category.COLOR


def token_facts(token: DesignToken) -> TokenFacts:
    name_lower = token.name.lower()
    full_path_lower = token.full_path.lower()
    return TokenFacts(
        value=(token.value or "").lower(),
        full_path=full_path_lower,
        search_text=f"{full_path_lower} {name_lower}",
        is_style=token.type == TokenType.STYLE,
    )


def matching_rule(token: DesignToken) -> Optional[CategoryRule]:
    """Return the first rule that matches the token, or None for the default"""
    facts = token_facts(token)

    # Value shape is checked before any naming convention
    if facts.value:
        for rule in VALUE_RULES:
            if rule.matches(facts):
                return rule

    for rule in NAME_RULES:
        if rule.matches(facts):
            return rule

    return None


def infer_category(token: DesignToken) -> Category:
    """Infer the category of a design token from its value and name patterns"""
    rule = matching_rule(token)
    return rule.category if rule else DEFAULT_CATEGORY
