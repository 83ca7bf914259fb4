import pytest
import requests
from bs4 import BeautifulSoup

from asa_service.scrapers import DododexScraper, ScraperError, TTLCache, WikiScraper
from asa_service.scrapers.wiki import (
    create_slug,
    determine_cave_type,
    determine_taming_method,
    determine_temperament,
    is_creature_page,
)
from tests.factories import FakeSession

CREATURES_PAGE = """
<table class="wikitable">
  <tr><th>Name</th><th>Image</th><th>Tameable</th><th>Rideable</th></tr>
  <tr>
    <td><a href="/wiki/Rex">Rex</a></td><td><img src="//img.test/rex.png"></td>
    <td>Yes</td><td>Yes</td>
  </tr>
  <tr>
    <td><a href="/wiki/Dodo">Dodo</a></td><td></td><td>Passive</td><td>No</td>
  </tr>
  <tr><td>Too</td><td>few</td></tr>
</table>
"""

CATEGORY_PAGE = """
<div class="mw-category-group"><ul>
  <li><a href="/wiki/Argentavis">Argentavis</a></li>
  <li><a href="/wiki/Category:Birds">Category:Birds</a></li>
  <li><a href="/wiki/Saddle_Guide">Saddle Guide</a></li>
  <li><a href="/wiki/Rex">Rex</a></li>
</ul></div>
"""

ISLAND_PAGE = """
<div id="mw-content-text">
  <ul>
    <li><a href="/wiki/Lava_Cave">Lava Cave</a></li>
    <li><a href="/wiki/Snow_Cave">Snow Cave</a> (north)</li>
    <li>Redwood Forest</li>
  </ul>
  <img alt="Snowy Mountains (The Island)" src="/images/The_Island_Snow.png">
</div>
"""

DODODEX_LIST = """
<div class="dino-card"><a href="/dinosaur/rex"><span class="name">Rex</span></a><img src="/img/rex.png"></div>
<div class="dino-card"><a href="/dinosaur/dodo"><span class="name">Dodo</span></a></div>
<div class="dino-card"><a href="/dinosaur/rex-2"><span class="name">Rex</span></a></div>
"""

DODODEX_REX = """
<h1 class="creature-title">Rex</h1>
<p class="description">Apex predator</p>
<div class="creature-image"><img src="/img/rex-big.png"></div>
<table class="stats-table">
  <tr><td>Health</td><td>1,100</td><td>220</td></tr>
  <tr><td>Melee Damage</td><td>100%</td><td>5%</td></tr>
</table>
<span class="kibble-type">Exceptional Kibble</span>
<div class="food-item"><span class="food-name">Raw Meat</span><span class="effectiveness">70%</span>
  <span class="quantity">34</span><span class="time">1h 34min</span></div>
<div class="spawn-map"><span class="map-name">The Island</span><span class="rarity">Common</span></div>
"""


def _wiki(pages, cache=None):
    return WikiScraper("https://wiki.test", cache=cache, session=FakeSession(pages))


def test_helpers():
    assert create_slug("Rock Drake!") == "rock-drake"
    assert create_slug("  Tek -- Rex ") == "tek-rex"
    assert determine_taming_method("Passive") == "passive"
    assert determine_taming_method("yes") == "knockout"
    assert determine_taming_method("No") == "untameable"
    assert determine_temperament("Alpha Raptor") == "aggressive"
    assert determine_temperament("Dodo") == "passive"
    assert determine_temperament("Argentavis") == "neutral"
    assert determine_cave_type("Lava Cave") == "lava"
    assert determine_cave_type("Artifact of the Brute") == "artifact"
    assert determine_cave_type("Hidden Grotto") == "standard"
    assert is_creature_page("Rex", "/wiki/Rex")
    assert not is_creature_page("Saddle Guide", "/wiki/Saddle_Guide")
    assert not is_creature_page("Ab", "/wiki/Ab")


def test_fetch_creatures_list_parses_wikitable():
    rows = _wiki({"/wiki/Creatures": CREATURES_PAGE}).fetch_creatures_list()
    assert [r["slug"] for r in rows] == ["rex", "dodo"]
    rex, dodo = rows
    assert rex["wiki_url"] == "https://wiki.test/wiki/Rex"
    assert rex["image_url"] == "https://img.test/rex.png"
    assert rex["is_tameable"] and rex["is_rideable"]
    assert dodo["taming_method"] == "passive"
    assert dodo["is_rideable"] is False


def test_fetch_all_creatures_tolerates_missing_pages_and_dedupes():
    pages = {"/wiki/Creatures": CREATURES_PAGE, "/wiki/Category:Flying_Creatures": CATEGORY_PAGE}
    rows = _wiki(pages).fetch_all_creatures()
    slugs = [r["slug"] for r in rows]
    assert slugs == ["rex", "dodo", "argentavis"]
    argy = rows[2]
    assert argy["biomes"] == ["mountains", "cliffs", "sky"]
    assert argy["is_breedable"] is True


def test_boss_category_marks_untameable():
    page = '<div class="mw-category-group"><ul><li><a href="/wiki/Broodmother">Broodmother</a></li></ul></div>'
    rows = _wiki({"/wiki/Category:Boss_Creatures": page}).fetch_creature_category("Boss_Creatures")
    assert rows[0]["is_tameable"] is False
    assert rows[0]["is_breedable"] is False


def test_fetch_uses_cache_and_wraps_errors():
    session = FakeSession({"/wiki/The_Island": ISLAND_PAGE, "/wiki/Broken": requests.ConnectionError("reset")})
    scraper = WikiScraper("https://wiki.test", cache=TTLCache(60), session=session)
    scraper.fetch("/wiki/The_Island")
    scraper.fetch("/wiki/The_Island")
    assert session.calls == ["https://wiki.test/wiki/The_Island"]
    assert session.headers["User-Agent"].startswith("Mozilla/5.0")
    with pytest.raises(ScraperError):
        scraper.fetch("/wiki/Broken")
    with pytest.raises(ScraperError):
        scraper.fetch("/wiki/Missing")


def test_cave_data_and_generic_regions_share_the_page():
    session = FakeSession({"/wiki/The_Island": ISLAND_PAGE})
    scraper = WikiScraper("https://wiki.test", cache=TTLCache(60), session=session)
    caves = scraper.get_cave_data("The_Island")
    assert [c["name"] for c in caves] == ["Lava Cave", "Snow Cave"]
    assert caves[1]["type"] == "ice"
    regions = scraper.get_map_regions("the-island", "The_Island", "The Island")
    assert [r.name for r in regions] == ["Snowy Mountains"]
    assert regions[0].category == "mountains"
    assert len(session.calls) == 1


def test_dododex_listing_dedupes_by_name():
    session = FakeSession({"/dinosaurs": DODODEX_LIST}, base_url="https://dododex.test")
    scraper = DododexScraper("https://dododex.test", session=session)
    rows = scraper.get_all_creatures()
    assert [r["slug"] for r in rows] == ["rex", "dodo"]
    assert rows[0]["image_url"] == "https://dododex.test/img/rex.png"
    assert rows[0]["dododex_url"] == "https://dododex.test/dinosaur/rex"


def test_dododex_listing_falls_back_to_links():
    page = '<a href="/dinosaur/argentavis">Argentavis</a><a href="/dinosaur/x">X</a>'
    session = FakeSession({"/dinosaurs": page}, base_url="https://dododex.test")
    rows = DododexScraper("https://dododex.test", session=session).get_all_creatures()
    assert [r["slug"] for r in rows] == ["argentavis"]


def test_dododex_details():
    session = FakeSession({"/dinosaur/rex": DODODEX_REX}, base_url="https://dododex.test")
    details = DododexScraper("https://dododex.test", session=session).get_creature_details("rex")
    assert details["name"] == "Rex"
    assert details["description"] == "Apex predator"
    assert details["stats"]["health"] == {"base": 1100.0, "wild": 220.0}
    assert details["stats"]["melee_damage"]["wild"] == 5.0
    taming = details["taming"]
    assert taming["tameable"] is True
    assert taming["kibble"] == "Exceptional Kibble"
    assert taming["foods"] == [{"name": "Raw Meat", "effectiveness": 70.0, "quantity": 34, "time": "1h 34min"}]
    assert details["spawns"] == [{"map": "The Island", "rarity": "Common"}]


def test_dododex_untameable_and_passive():
    scraper = DododexScraper("https://dododex.test", session=FakeSession({}))
    blocked = scraper.extract_taming_data(BeautifulSoup('<div class="cannot-tame"></div>', "html.parser"))
    assert blocked["tameable"] is False
    passive = scraper.extract_taming_data(BeautifulSoup('<div class="passive-tame"></div>', "html.parser"))
    assert passive["method"] == "passive"
