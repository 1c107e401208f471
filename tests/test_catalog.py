import dataclasses
from types import MappingProxyType

import pytest

from umami_load.catalog import CATALOG, PAGE_TITLES, ContentNode, ContentType, Locale, get_nodes, page_title


def test_catalog_partitions_every_content_type():
    assert set(CATALOG) == set(ContentType)
    assert len(get_nodes(ContentType.ARTICLE)) == 8
    assert len(get_nodes(ContentType.BASIC_PAGE)) == 1
    assert len(get_nodes(ContentType.RECIPE)) == 9


def test_node_ids_are_unique():
    nids = [node.nid for nodes in CATALOG.values() for node in nodes]
    assert len(nids) == len(set(nids)) == 18


@pytest.mark.parametrize("locale", list(Locale))
def test_every_node_has_every_locale(locale):
    for nodes in CATALOG.values():
        for node in nodes:
            assert node.url_for(locale).startswith(f"/{locale.value}/")
            assert node.title_for(locale)


def test_titles_keep_raw_entities():
    carrots = next(n for n in get_nodes(ContentType.ARTICLE) if n.nid == 14)
    assert carrots.title_for(Locale.EN) == "Let&#039;s hear it for carrots"


def test_nodes_are_immutable():
    node = get_nodes(ContentType.RECIPE)[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.nid = 99  # type: ignore[misc]
    with pytest.raises(TypeError):
        node.url[Locale.EN] = "/elsewhere"  # type: ignore[index]


def test_node_identity_is_nid():
    a = ContentNode(1, MappingProxyType({Locale.EN: "/a", Locale.ES: "/a"}), {Locale.EN: "A", Locale.ES: "A"})
    b = ContentNode(1, {Locale.EN: "/b", Locale.ES: "/b"}, {Locale.EN: "B", Locale.ES: "B"})
    assert a == b
    assert len({a, b}) == 1


def test_node_requires_every_locale():
    with pytest.raises(ValueError):
        ContentNode(99, {Locale.EN: "/x"}, {Locale.EN: "X"})


def test_fixed_page_titles():
    assert page_title("front", Locale.EN) == ("/", "Home")
    assert page_title("front", Locale.ES) == ("/es", "Inicio")
    assert page_title("articles", Locale.ES) == ("/es/articles/", "Artículos")
    assert page_title("recipes", Locale.ES) == ("/es/recipes/", "Recetas")
    for variants in PAGE_TITLES.values():
        assert set(variants) == set(Locale)
