import json
import re
import string
import time

import pytest

from shortlinks import database, links
from shortlinks.links import LinkError, LinkSettings, SlugStyle

LOWER = set(string.ascii_lowercase)
UID_CHARS = set(string.ascii_lowercase + string.digits)


@pytest.fixture
def db(tmp_path):
    conn = database.open_db(tmp_path / "links.sqlite")
    yield conn
    conn.close()


def _request(shortlink, expiry_delay):
    return json.dumps(
        {
            "shortlink": shortlink,
            "longlink": f"https://example-{shortlink}.com",
            "expiry_delay": expiry_delay,
        }
    )


SETTINGS = LinkSettings()


def test_adding_link_with_shortlink(db):
    for shortlink in ["test1", "test2", "test3"]:
        created, expiry = links.add_link(db, _request(shortlink, 10), SETTINGS)
        assert created == shortlink
        assert expiry > 0
    with pytest.raises(LinkError, match="Short URL is already in use!"):
        links.add_link(db, _request("test1", 10), SETTINGS)


def test_link_resolution(db):
    links.add_link(db, _request("test1", 10), SETTINGS)
    assert links.get_longurl(db, "test1", False)[0] == "https://example-test1.com"


def test_link_deletion(db):
    links.add_link(db, _request("test2", 10), SETTINGS)
    assert links.delete_link(db, "test2") is True
    assert links.get_longurl(db, "test2", False) == (None, None, None)


def test_delete_invalid_link(db):
    assert links.delete_link(db, "Not Valid") is False


def test_data_fetching_all(db):
    links.add_link(db, _request("test1", 10), SETTINGS)
    links.add_link(db, _request("test3", 10), SETTINGS)
    database.add_hit(db, "test1")
    rows = json.loads(links.getall_json(db))
    assert len(rows) == 2
    assert rows[0]["shortlink"] == "test1"
    assert rows[1]["shortlink"] == "test3"
    assert rows[0]["longlink"] == "https://example-test1.com"
    assert rows[1]["longlink"] == "https://example-test3.com"
    assert rows[0]["hits"] == 1
    assert rows[1]["hits"] == 0
    assert rows[0]["expiry_time"] > 0
    assert rows[1]["expiry_time"] > 0


def test_getall_json_empty(db):
    assert links.getall_json(db) == "[]"


def test_generated_pair_slug(db):
    created, _ = links.add_link(db, _request("", 10), SETTINGS)
    parts = created.split("-")
    assert len(parts) == 2
    assert min(len(part) for part in parts) > 0
    assert set(parts[0]) <= LOWER
    assert set(parts[1]) <= LOWER
    assert links.get_longurl(db, created, False)[0] == "https://example-.com"


def test_generated_uid_slug(db):
    settings = LinkSettings(slug_style=SlugStyle.UID, slug_length=12)
    created, _ = links.add_link(db, _request("", 10), settings)
    assert len(created) == 12
    assert set(created) <= UID_CHARS


def test_gen_link_string_styles():
    uid = links.gen_link("UID", 5)
    assert len(uid) == 5
    assert set(uid) <= UID_CHARS

    pair = links.gen_link("anything", 5)
    parts = pair.split("-")
    assert len(parts) == 2
    assert min(len(part) for part in parts) > 0
    assert set(parts[0]) <= LOWER
    assert set(parts[1]) <= LOWER


def test_slug_style_fallback():
    assert SlugStyle("Pair") is SlugStyle.PAIR
    assert SlugStyle("unknown") is SlugStyle.PAIR
    assert SlugStyle("UID") is SlugStyle.UID


def test_expand_link(db):
    links.add_link(db, _request("test4", 10), SETTINGS)
    longurl, hits, expiry = links.get_longurl(db, "test4", True)
    assert longurl == "https://example-test4.com"
    assert hits == 0
    assert expiry > 0


def test_link_expiry(db):
    links.add_link(db, _request("test1", 1), SETTINGS)
    time.sleep(1.2)
    assert links.get_longurl(db, "test1", False) == (None, None, None)
    assert links.get_longurl(db, "test4", True) == (None, None, None)


@pytest.mark.parametrize(
    "link, expected",
    [
        ("abc", True),
        ("a-b_c9", True),
        ("", False),
        ("ABC", False),
        ("a b", False),
        ("abc\n", False),
        ("a/b", False),
    ],
)
def test_validate_link(link, expected):
    assert links.validate_link(link) is expected


def test_get_longurl_invalid(db):
    assert links.get_longurl(db, "BAD!", True) == (None, None, None)


@pytest.mark.parametrize(
    "request_body",
    [
        "not json",
        "[1, 2]",
        '{"shortlink": "abc"}',
        '{"shortlink": 5, "longlink": "https://example.com"}',
        '{"shortlink": "abc", "longlink": "https://example.com", "expiry_delay": 1.5}',
        '{"shortlink": "abc", "longlink": "https://example.com", "expiry_delay": true}',
    ],
)
def test_invalid_request(db, request_body):
    with pytest.raises(LinkError) as info:
        links.add_link(db, request_body, SETTINGS)
    assert info.value.reason == "Invalid request!"


def test_invalid_shortlink(db):
    with pytest.raises(LinkError, match="Short URL is not valid!"):
        links.add_link(db, _request("Bad Link", 10), SETTINGS)


def test_missing_shortlink_and_delay_use_defaults(db):
    created, expiry = links.add_link(
        db, '{"longlink": "https://example.com"}', SETTINGS
    )
    assert re.fullmatch(r"[a-z]+-[a-z]+", created)
    assert expiry == 0


def test_negative_delay_means_no_expiry(db):
    _, expiry = links.add_link(db, _request("neg", -50), SETTINGS)
    assert expiry == 0


def test_delay_capped_at_five_years(db):
    before = int(time.time())
    _, expiry = links.add_link(db, _request("long", 10**12), SETTINGS)
    after = int(time.time())
    assert before + 157784760 <= expiry <= after + 157784760


def test_public_mode_default_delay(db):
    settings = LinkSettings(public_mode=True, public_mode_expiry_delay=100)
    before = int(time.time())
    _, expiry = links.add_link(db, _request("pub1", 0), settings)
    after = int(time.time())
    assert before + 100 <= expiry <= after + 100


def test_public_mode_caps_delay(db):
    settings = LinkSettings(public_mode=True, public_mode_expiry_delay=100)
    before = int(time.time())
    _, expiry = links.add_link(db, _request("pub2", 1000), settings)
    after = int(time.time())
    assert before + 100 <= expiry <= after + 100


def test_public_mode_keeps_shorter_delay(db):
    settings = LinkSettings(public_mode=True, public_mode_expiry_delay=100)
    before = int(time.time())
    _, expiry = links.add_link(db, _request("pub3", 20), settings)
    after = int(time.time())
    assert before + 20 <= expiry <= after + 20