"""Static content catalog of the Umami demo site.

Every node of the default Umami install, with its path and ``<title>`` text in
each supported locale. Titles are stored exactly as the site renders them
inside ``<title>``, HTML entities included (``Let&#039;s ...``), because page
validation compares raw markup.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

__all__: Sequence[str] = (
    "Locale",
    "ContentType",
    "ContentNode",
    "CATALOG",
    "PAGE_TITLES",
    "get_nodes",
    "page_title",
)


class Locale(str, Enum):
    EN = "en"
    ES = "es"


class ContentType(str, Enum):
    ARTICLE = "article"
    BASIC_PAGE = "basic_page"
    RECIPE = "recipe"


@dataclass(frozen=True, slots=True)
class ContentNode:
    """One node of the site. Identity is ``nid``."""

    nid: int
    url: Mapping[Locale, str] = field(compare=False)
    title: Mapping[Locale, str] = field(compare=False)

    def __post_init__(self) -> None:
        for locale in Locale:
            if locale not in self.url or locale not in self.title:
                raise ValueError(f"node {self.nid} has no {locale.value} variant")

    def url_for(self, locale: Locale) -> str:
        return self.url[locale]

    def title_for(self, locale: Locale) -> str:
        return self.title[locale]


def _node(nid: int, url_en: str, url_es: str, title_en: str, title_es: str) -> ContentNode:
    return ContentNode(
        nid=nid,
        url=MappingProxyType({Locale.EN: url_en, Locale.ES: url_es}),
        title=MappingProxyType({Locale.EN: title_en, Locale.ES: title_es}),
    )


_ARTICLES: Tuple[ContentNode, ...] = (
    _node(
        10,
        "/en/articles/give-it-a-go-and-grow-your-own-herbs",
        "/es/articles/prueba-y-cultiva-tus-propias-hierbas",
        "Give it a go and grow your own herbs",
        "Prueba y cultiva tus propias hierbas",
    ),
    _node(
        11,
        "/en/articles/dairy-free-and-delicious-milk-chocolate",
        "/es/articles/delicioso-chocolate-sin-lactosa",
        "Dairy-free and delicious milk chocolate",
        "Delicioso chocolate sin lactosa",
    ),
    _node(
        12,
        "/en/articles/the-real-deal-for-supermarket-savvy-shopping",
        "/es/articles/el-verdadeo-negocio-para-comprar-en-el-supermercado",
        "The real deal for supermarket savvy shopping",
        "El verdadero negocio para comprar en el supermercado",
    ),
    _node(
        13,
        "/en/articles/the-umami-guide-to-our-favourite-mushrooms",
        "/es/articles/guia-umami-de-nuestras-setas-preferidas",
        "The Umami guide to our favorite mushrooms",
        "Guía Umami de nuestras setas preferidas",
    ),
    _node(
        14,
        "/en/articles/lets-hear-it-for-carrots",
        "/es/articles/un-aplauso-para-las-zanahorias",
        "Let&#039;s hear it for carrots",
        "Un aplauso para las zanahorias",
    ),
    _node(
        15,
        "/en/articles/baking-mishaps-our-troubleshooting-tips",
        "/es/articles/percances-al-hornear-nuestros-consejos-para-solucionar-problemas",
        "Baking mishaps - our troubleshooting tips",
        "Percances al hornear - nuestros consejos para solucionar los problemas",
    ),
    _node(
        16,
        "/en/articles/skip-the-spirits-with-delicious-mocktails",
        "/es/articles/salta-los-espiritus-con-deliciosos-cocteles-sin-alcohol",
        "Skip the spirits with delicious mocktails",
        "Salta los espíritus con deliciosos cócteles sin alcohol",
    ),
    _node(
        17,
        "/en/articles/give-your-oatmeal-the-ultimate-makeover",
        "/es/articles/dale-a-tu-avena-el-cambio-de-imagen-definitivo",
        "Give your oatmeal the ultimate makeover",
        "Dale a tu avena el cambio de imagen definitivo",
    ),
)

_BASIC_PAGES: Tuple[ContentNode, ...] = (
    _node(18, "/en/about-umami", "/es/acerca-de-umami", "About Umami", "Acerca de Umami"),
)

_RECIPES: Tuple[ContentNode, ...] = (
    _node(
        1,
        "/en/recipes/deep-mediterranean-quiche",
        "/es/recipes/quiche-mediterráneo-profundo",
        "Deep mediterranean quiche",
        "Quiche mediterráneo profundo",
    ),
    _node(
        2,
        "/en/recipes/vegan-chocolate-and-nut-brownies",
        "/es/recipes/bizcochos-veganos-de-chocolate-y-nueces",
        "Vegan chocolate and nut brownies",
        "Bizcochos veganos de chocolate y nueces",
    ),
    _node(
        3,
        "/en/recipes/super-easy-vegetarian-pasta-bake",
        "/es/recipes/pasta-vegetariana-horno-super-facil",
        "Super easy vegetarian pasta bake",
        "Pasta vegetariana al horno súper fácil",
    ),
    _node(4, "/en/recipes/watercress-soup", "/es/recipes/sopa-de-berro", "Watercress soup", "Sopa de berro"),
    _node(
        5,
        "/en/recipes/victoria-sponge-cake",
        "/es/recipes/pastel-victoria",
        "Victoria sponge cake",
        "Pastel Victoria",
    ),
    _node(6, "/en/recipes/gluten-free-pizza", "/es/recipes/pizza-sin-gluten", "Gluten free pizza", "Pizza sin gluten"),
    _node(
        7,
        "/en/recipes/thai-green-curry",
        "/es/recipes/curry-verde-tailandes",
        "Thai green curry",
        "Curry verde tailandés",
    ),
    _node(8, "/en/recipes/crema-catalana", "/es/recipes/crema-catalana", "Crema catalana", "Crema catalana"),
    _node(
        9,
        "/en/recipes/fiery-chili-sauce",
        "/es/recipes/salsa-de-chile-ardiente",
        "Fiery chili sauce",
        "Salsa de chile ardiente",
    ),
)

CATALOG: Mapping[ContentType, Tuple[ContentNode, ...]] = MappingProxyType(
    {
        ContentType.ARTICLE: _ARTICLES,
        ContentType.BASIC_PAGE: _BASIC_PAGES,
        ContentType.RECIPE: _RECIPES,
    }
)

# Fixed (non-node) pages: path and expected title per locale.
PAGE_TITLES: Mapping[str, Mapping[Locale, Tuple[str, str]]] = MappingProxyType(
    {
        "front": MappingProxyType({Locale.EN: ("/", "Home"), Locale.ES: ("/es", "Inicio")}),
        # Spanish listing title is the correctly decoded "Artículos", not its Latin-1 mojibake
        "articles": MappingProxyType(
            {Locale.EN: ("/en/articles/", "Articles"), Locale.ES: ("/es/articles/", "Artículos")}
        ),
        "recipes": MappingProxyType(
            {Locale.EN: ("/en/recipes/", "Recipes"), Locale.ES: ("/es/recipes/", "Recetas")}
        ),
        "contact": MappingProxyType(
            {
                Locale.EN: ("/en/contact", "Website feedback"),
                Locale.ES: ("/es/contact", "Comentarios sobre el sitio web"),
            }
        ),
    }
)


def get_nodes(content_type: ContentType) -> Tuple[ContentNode, ...]:
    """Return every node of *content_type*."""
    return CATALOG[content_type]


def page_title(page: str, locale: Locale) -> Tuple[str, str]:
    """Return ``(path, title)`` of a fixed page such as ``"front"`` in *locale*."""
    return PAGE_TITLES[page][locale]
