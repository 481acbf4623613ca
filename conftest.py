"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Component tree fixtures mirroring analyzer output
- Design analysis fixtures (palette, typography, library, template parts)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from builder_export.ir import (
        ColorPalette,
        ComponentInfo,
        ComponentLibrary,
        TemplateParts,
        TypographySystem,
    )

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Component Tree Fixtures
# =============================================================================


@pytest.fixture
def card_tree() -> list[ComponentInfo]:
    """A single card: div.card > (h3, p, a.btn[href=/x]).

    Returns:
        One-root forest as produced by the analyzer.
    """
    from builder_export.ir import load_component_tree

    return load_component_tree(
        {
            "componentType": "card",
            "tagName": "div",
            "className": "card shadow",
            "styles": {"padding": "24px", "backgroundColor": "#ffffff"},
            "children": [
                {
                    "componentType": "heading",
                    "tagName": "h3",
                    "textContent": "Card Title",
                    "innerHTML": "Card Title",
                    "styles": {"fontSize": "24px", "color": "#202124"},
                },
                {
                    "componentType": "paragraph",
                    "tagName": "p",
                    "textContent": "Body copy for the card.",
                    "innerHTML": "Body copy for the card.",
                },
                {
                    "componentType": "button",
                    "tagName": "a",
                    "className": "btn btn-primary",
                    "attributes": {"href": "/x"},
                    "textContent": "Read more",
                    "styles": {"backgroundColor": "#1a73e8", "color": "#ffffff"},
                },
            ],
        }
    )


@pytest.fixture
def untyped_card_tree() -> list[ComponentInfo]:
    """Card tree with no semantic types, exercising tag heuristics.

    Returns:
        One-root forest where every componentType is "unknown".
    """
    from builder_export.ir import load_component_tree

    return load_component_tree(
        {
            "tagName": "div",
            "className": "card",
            "children": [
                {"tagName": "h3", "textContent": "Card Title"},
                {"tagName": "p", "textContent": "Body copy."},
                {
                    "tagName": "a",
                    "className": "btn",
                    "attributes": {"href": "/x"},
                    "textContent": "Read more",
                },
            ],
        }
    )


@pytest.fixture
def gallery_tree() -> list[ComponentInfo]:
    """A grid of five images.

    Returns:
        One-root forest whose root holds five img children.
    """
    from builder_export.ir import load_component_tree

    return load_component_tree(
        {
            "componentType": "gallery",
            "tagName": "div",
            "className": "gallery gallery-grid",
            "styles": {"display": "grid", "gridTemplateColumns": "1fr 1fr 1fr", "gap": "16px"},
            "children": [
                {
                    "componentType": "image",
                    "tagName": "img",
                    "attributes": {"src": f"/img/{index}.jpg", "alt": f"Photo {index}"},
                }
                for index in range(1, 6)
            ],
        }
    )


@pytest.fixture
def single_image_tree() -> list[ComponentInfo]:
    """A wrapper holding one image (not a gallery).

    Returns:
        One-root forest with a single img child.
    """
    from builder_export.ir import load_component_tree

    return load_component_tree(
        {
            "componentType": "container",
            "tagName": "div",
            "children": [
                {
                    "componentType": "image",
                    "tagName": "img",
                    "attributes": {"src": "/img/hero.jpg", "alt": "Hero"},
                }
            ],
        }
    )


@pytest.fixture
def landing_tree() -> list[ComponentInfo]:
    """A small landing page exercising layout, widgets and behavior.

    Returns:
        Three-root forest: an animated hero, a two-column row and an icon.
    """
    from builder_export.ir import load_component_tree

    return load_component_tree(
        [
            {
                "componentType": "hero",
                "tagName": "section",
                "id": "hero",
                "className": "hero",
                "styles": {
                    "backgroundColor": "rgb(26, 115, 232)",
                    "padding": "80px 20px",
                    "backgroundAttachment": "fixed",
                    "boxShadow": "0px 4px 12px 0px rgba(0, 0, 0, 0.2)",
                },
                "advancedAnalysis": {
                    "responsiveStyles": {
                        "desktop": {"padding": "80px 20px", "fontSize": "48px"},
                        "tablet": {"padding": "40px 20px", "fontSize": "48px"},
                        "mobile": {"padding": "20px 10px", "display": "none"},
                    },
                    "behavior": {
                        "hasAnimations": True,
                        "animations": [
                            {"name": "fadeInUp", "duration": "0.8s", "delay": "200ms"}
                        ],
                    },
                },
                "children": [
                    {
                        "componentType": "heading",
                        "tagName": "h1",
                        "textContent": "Welcome",
                        "styles": {"fontSize": "48px", "fontFamily": "Inter, sans-serif"},
                    },
                    {
                        "componentType": "button",
                        "tagName": "button",
                        "textContent": "Start",
                        "styles": {"backgroundColor": "#ea4335", "color": "#ffffff"},
                        "advancedAnalysis": {
                            "interactiveStates": {
                                "normal": {"transform": "none", "backgroundColor": "#ea4335"},
                                "hover": {
                                    "transform": "scale(1.05)",
                                    "backgroundColor": "#c5221f",
                                    "transition": "all 0.3s ease",
                                },
                            }
                        },
                    },
                ],
            },
            {
                "componentType": "container",
                "tagName": "div",
                "className": "row",
                "children": [
                    {
                        "componentType": "column",
                        "tagName": "div",
                        "className": "col-8",
                        "children": [
                            {"componentType": "paragraph", "tagName": "p", "textContent": "Left"},
                            {
                                "componentType": "container",
                                "tagName": "div",
                                "className": "inner-box",
                                "children": [
                                    {"componentType": "paragraph", "tagName": "p", "textContent": "Nested"}
                                ],
                            },
                        ],
                    },
                    {
                        "componentType": "column",
                        "tagName": "div",
                        "className": "col-4",
                        "children": [
                            {
                                "componentType": "image",
                                "tagName": "img",
                                "attributes": {"src": "/img/side.png", "alt": "Side"},
                            }
                        ],
                    },
                ],
            },
            {
                "componentType": "icon",
                "tagName": "i",
                "className": "fa fa-star",
                "styles": {"fontSize": "32px", "color": "#fbbc05"},
            },
        ]
    )


# =============================================================================
# Design Analysis Fixtures
# =============================================================================


@pytest.fixture
def color_palette() -> ColorPalette:
    """Site palette with one color per role and two neutrals.

    Returns:
        ColorPalette with semantic success color and one gradient.
    """
    from builder_export.ir import ColorPalette

    return ColorPalette.model_validate(
        {
            "primary": [{"hex": "#1A73E8", "name": "Brand Blue"}],
            "secondary": [{"hex": "#ea4335"}],
            "accent": [{"hex": "#fbbc05"}],
            "neutral": [{"hex": "#ffffff"}, {"hex": "#202124"}],
            "semantic": {"success": {"hex": "#34a853"}},
            "gradients": [
                {
                    "type": "linear",
                    "angle": 90,
                    "colors": [
                        {"color": "#1a73e8", "position": 0},
                        {"color": "#34a853", "position": 100},
                    ],
                }
            ],
        }
    )


@pytest.fixture
def typography_system() -> TypographySystem:
    """Typography with Inter headings, Georgia body and a four-step scale.

    Returns:
        TypographySystem with h1/h2/body text styles.
    """
    from builder_export.ir import TypographySystem

    return TypographySystem.model_validate(
        {
            "fontFamilies": [
                {
                    "name": "Inter",
                    "weights": [{"weight": 400}, {"weight": 700}],
                    "contexts": [{"type": "heading"}],
                    "fallbacks": ["sans-serif"],
                },
                {"name": "Georgia", "contexts": [{"type": "body"}], "fallbacks": ["serif"]},
            ],
            "typeScale": {
                "base": 16,
                "ratio": 1.25,
                "sizes": [
                    {"name": "sm", "px": 14},
                    {"name": "base", "px": 16},
                    {"name": "lg", "px": 20},
                    {"name": "xl", "px": 25},
                ],
            },
            "textStyles": {
                "h1": {"fontFamily": "Inter", "fontSize": "48px", "fontWeight": 700, "lineHeight": 1.2},
                "h2": {"fontFamily": "Inter", "fontSize": "36px", "fontWeight": 700, "lineHeight": 1.3},
                "body": {"fontFamily": "Georgia", "fontSize": "16px", "fontWeight": 400, "lineHeight": 1.6},
            },
            "globalSettings": {
                "baseFontSize": 16,
                "baseFontFamily": "Georgia",
                "baseLineHeight": 1.6,
                "baseColor": "#202124",
                "headingFontFamily": "Inter",
                "headingFontWeight": 700,
            },
        }
    )


@pytest.fixture
def component_library() -> ComponentLibrary:
    """Library with templates spanning the promotion thresholds.

    Returns:
        ComponentLibrary with scores 85, 65, 40 and 10.
    """
    from builder_export.ir import ComponentLibrary

    return ComponentLibrary.model_validate(
        {
            "templates": [
                {
                    "id": "tpl-101",
                    "name": "Hero Banner",
                    "category": "heroes",
                    "componentType": "hero",
                    "html": "<section class=\"hero\"><h1>Hi</h1></section>",
                    "usage": 4,
                    "tags": ["hero"],
                    "reusabilityScore": 85,
                },
                {
                    "id": "tpl-102",
                    "name": "Feature Card",
                    "category": "cards",
                    "componentType": "card",
                    "html": "<div class=\"card\"><h3>Title</h3></div>",
                    "usage": 6,
                    "tags": ["card"],
                    "reusabilityScore": 65,
                },
                {
                    "id": "tpl-103",
                    "name": "Call Out",
                    "category": "ctas",
                    "componentType": "cta",
                    "html": "<div class=\"cta\">Go</div>",
                    "usage": 2,
                    "reusabilityScore": 40,
                },
                {
                    "id": "tpl-104",
                    "name": "One Off",
                    "category": "other",
                    "componentType": "text",
                    "html": "<p>x</p>",
                    "usage": 1,
                    "reusabilityScore": 10,
                },
            ]
        }
    )


@pytest.fixture
def template_parts() -> TemplateParts:
    """Header and footer above the confidence cut-off, sidebar below it.

    Returns:
        TemplateParts with confidences 90, 70 and 30.
    """
    from builder_export.ir import TemplateParts

    return TemplateParts.model_validate(
        {
            "header": {
                "type": "header",
                "name": "Site Header",
                "html": "<header><nav>Menu</nav></header>",
                "confidence": 90,
            },
            "footer": {
                "type": "footer",
                "name": "Site Footer",
                "html": "<footer>&copy; 2024</footer>",
                "confidence": 70,
            },
            "sidebar": {
                "type": "sidebar",
                "name": "Sidebar",
                "html": "<aside>Links</aside>",
                "confidence": 30,
            },
        }
    )
