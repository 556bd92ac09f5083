"""Validation, generation and management of short links."""

from __future__ import annotations

import enum
import json
import random
import re
import secrets
import sqlite3
from dataclasses import dataclass

from . import database

# Longest allowed expiry delay: five years, in seconds.
MAX_EXPIRY_DELAY = 157784760

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_LINK_RE = re.compile(r"[a-z0-9_-]+")

_ADJECTIVES = (
    "admiring", "adoring", "affectionate", "agitated", "amazing", "angry", "awesome", "beautiful",
    "blissful", "bold", "boring", "brave", "busy", "charming", "clever", "compassionate", "competent",
    "condescending", "confident", "cool", "cranky", "crazy", "dazzling", "determined", "distracted",
    "dreamy", "eager", "ecstatic", "elastic", "elated", "elegant", "eloquent", "epic", "exciting",
    "fervent", "festive", "flamboyant", "focused", "friendly", "frosty", "funny", "gallant", "gifted",
    "goofy", "gracious", "great", "happy", "hardcore", "heuristic", "hopeful", "hungry", "infallible",
    "inspiring", "intelligent", "interesting", "jolly", "jovial", "keen", "kind", "laughing", "loving",
    "lucid", "magical", "modest", "musing", "mystifying", "naughty", "nervous", "nice", "nifty",
    "nostalgic", "objective", "optimistic", "peaceful", "pedantic", "pensive", "practical", "priceless",
    "quirky", "quizzical", "recursing", "relaxed", "reverent", "romantic", "sad", "serene", "sharp",
    "silly", "sleepy", "stoic", "strange", "stupefied", "suspicious", "sweet", "tender", "thirsty",
    "trusting", "unruffled", "upbeat", "vibrant", "vigilant", "vigorous", "wizardly", "wonderful",
    "xenodochial", "youthful", "zealous", "zen",
)

_NAMES = (
    "agnesi", "albattani", "allen", "almeida", "antonelli", "archimedes", "ardinghelli", "aryabhata",
    "austin", "babbage", "banach", "banzai", "bardeen", "bartik", "bassi", "beaver", "bell", "benz",
    "bhabha", "bhaskara", "black", "blackburn", "blackwell", "bohr", "booth", "borg", "bose", "bouman",
    "boyd", "brahmagupta", "brattain", "brown", "buck", "burnell", "cannon", "carson", "cartwright",
    "carver", "cauchy", "cerf", "chandrasekhar", "chaplygin", "chatelet", "chatterjee", "chaum",
    "chebyshev", "clarke", "cohen", "colden", "cori", "cray", "curie", "curran", "darwin", "davinci",
    "dewdney", "dhawan", "diffie", "dijkstra", "dirac", "driscoll", "dubinsky", "easley", "edison",
    "einstein", "elbakyan", "elgamal", "elion", "ellis", "engelbart", "euclid", "euler", "faraday",
    "feistel", "fermat", "fermi", "feynman", "franklin", "gagarin", "galileo", "galois", "ganguly",
    "gates", "gauss", "germain", "goldberg", "goldstine", "goldwasser", "golick", "goodall", "gould",
    "greider", "grothendieck", "haibt", "hamilton", "hardy", "haslett", "hawking", "heisenberg",
    "hellman", "hermann", "herschel", "hertz", "heyrovsky", "hodgkin", "hofstadter", "hoover", "hopper",
    "hugle", "hypatia", "ishizaka", "jackson", "jang", "jemison", "jennings", "jepsen", "johnson",
    "joliot", "jones", "kalam", "kapitsa", "kare", "keldysh", "keller", "kepler", "khayyam", "khorana",
    "kilby", "kirch", "knuth", "kowalevski", "lalande", "lamarr", "lamport", "leakey", "leavitt",
    "lederberg", "lehmann", "lewin", "lichterman", "liskov", "lovelace", "lumiere", "mahavira",
    "margulis", "matsumoto", "maxwell", "mayer", "mccarthy", "mcclintock", "mclaren", "mclean",
    "mcnulty", "meitner", "mendel", "mendeleev", "meninsky", "merkle", "mestorf", "mirzakhani",
    "montalcini", "moore", "morse", "moser", "murdock", "napier", "nash", "neumann", "newton",
    "nightingale", "nobel", "noether", "northcutt", "noyce", "panini", "pare", "pascal", "pasteur",
    "payne", "perlman", "pike", "poincare", "poitras", "proskuriakova", "ptolemy", "raman",
    "ramanujan", "rhodes", "ride", "riemann", "ritchie", "robinson", "roentgen", "rosalind", "rubin",
    "saha", "sammet", "sanderson", "satoshi", "shamir", "shannon", "shaw", "shirley", "shockley",
    "shtern", "sinoussi", "snyder", "solomon", "spence", "stonebraker", "sutherland", "swanson",
    "swartz", "swirles", "taussig", "tesla", "tharp", "thompson", "torvalds", "tu", "turing",
    "varahamihira", "vaughan", "vaughn", "villani", "visvesvaraya", "volhard", "wescoff",
    "weierstrass", "wilbur", "wiles", "williams", "williamson", "wilson", "wing", "wozniak", "wright",
    "wu", "yalow", "yonath", "zhukovsky",
)

_UID_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


class SlugStyle(enum.Enum):
    """How generated short links look."""

    PAIR = "Pair"
    UID = "UID"

    @classmethod
    def _missing_(cls, value):
        # Any style other than UID falls back to adjective-name pairs.
        return cls.PAIR


@dataclass(frozen=True)
class LinkSettings:
    """Settings that shape how new links are created."""

    slug_style: SlugStyle = SlugStyle.PAIR
    slug_length: int = 8
    public_mode: bool = False
    public_mode_expiry_delay: int = 0


class LinkError(Exception):
    """A link could not be created; the message is the reason."""

    @property
    def reason(self) -> str:
        return str(self)


def validate_link(link: str) -> bool:
    """Return whether ``link`` uses only a-z, 0-9, '-' and '_'."""
    return _LINK_RE.fullmatch(link) is not None


def gen_link(style: SlugStyle | str, length: int) -> str:
    """Generate a random short link in the given style."""
    if SlugStyle(style) is SlugStyle.UID:
        return "".join(secrets.choice(_UID_CHARS) for _ in range(length))
    return f"{random.choice(_ADJECTIVES)}-{random.choice(_NAMES)}"


def get_longurl(
    db: sqlite3.Connection, shortlink: str, needhits: bool
) -> tuple[str | None, int | None, int | None]:
    """Look up ``shortlink`` if it is valid; see ``database.find_url``."""
    if not validate_link(shortlink):
        return None, None, None
    return database.find_url(db, shortlink, needhits)


def getall_json(db: sqlite3.Connection) -> str:
    """Return all active links as a compact JSON array."""
    return json.dumps(
        [row.to_dict() for row in database.getall(db)], separators=(",", ":")
    )


def _is_i64(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and _I64_MIN <= value <= _I64_MAX


def _parse_request(request: str) -> tuple[str, str, int]:
    try:
        data = json.loads(request)
    except ValueError:
        raise LinkError("Invalid request!") from None
    if not isinstance(data, dict):
        raise LinkError("Invalid request!")
    shortlink = data.get("shortlink", "")
    longlink = data.get("longlink")
    expiry_delay = data.get("expiry_delay", 0)
    if (
        not isinstance(shortlink, str)
        or not isinstance(longlink, str)
        or not _is_i64(expiry_delay)
    ):
        raise LinkError("Invalid request!")
    return shortlink, longlink, expiry_delay


def add_link(
    db: sqlite3.Connection, request: str, settings: LinkSettings
) -> tuple[str, int]:
    """Create a link from a JSON request; return (shortlink, expiry_time).

    Raises ``LinkError`` with the reason when the link cannot be added.
    """
    shortlink, longlink, expiry_delay = _parse_request(request)

    shortlink_provided = bool(shortlink)
    if not shortlink_provided:
        shortlink = gen_link(settings.slug_style, settings.slug_length)

    if settings.public_mode and settings.public_mode_expiry_delay > 0:
        if expiry_delay == 0:
            expiry_delay = settings.public_mode_expiry_delay
        else:
            expiry_delay = min(expiry_delay, settings.public_mode_expiry_delay)

    expiry_delay = max(min(expiry_delay, MAX_EXPIRY_DELAY), 0)

    if not validate_link(shortlink):
        raise LinkError("Short URL is not valid!")

    try:
        expiry_time = database.add_link(db, shortlink, longlink, expiry_delay)
    except sqlite3.IntegrityError as exc:
        if shortlink_provided and "UNIQUE" in str(exc):
            raise LinkError("Short URL is already in use!") from exc
        raise LinkError("Something went wrong!") from exc
    except sqlite3.Error as exc:
        raise LinkError("Something went wrong!") from exc
    return shortlink, expiry_time


def delete_link(db: sqlite3.Connection, shortlink: str) -> bool:
    """Delete ``shortlink`` if it is valid; return whether it was removed."""
    if not validate_link(shortlink):
        return False
    return database.delete_link(db, shortlink)