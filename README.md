# shortlinks

The storage and link-handling core of a small self-hosted URL shortener.
Links are kept in a SQLite database. Each link has a short name, a target
URL, a hit counter and an expiry time. An expiry time of `0` means the link
never expires.

The package has two modules:

- `shortlinks.database` opens the database and reads and writes rows.
- `shortlinks.links` checks and generates shortlinks and creates links from
  JSON requests.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```python
import json

from shortlinks import database, links

db = database.open_db("links.sqlite")

settings = links.LinkSettings()
request = json.dumps({"shortlink": "docs", "longlink": "https://example.com/docs"})
shortlink, expiry_time = links.add_link(db, request, settings)

longurl, hits, expiry = links.get_longurl(db, "docs", True)
database.add_hit(db, "docs")

print(links.getall_json(db))

links.delete_link(db, "docs")
removed = database.cleanup(db)
```

## The database

`database.open_db(path)` opens the SQLite file and returns a
`sqlite3.Connection` in autocommit mode. It creates the `urls` table and its
indexes if they are missing. It also adds the `expiry_time` column to an
older table that does not have it. The schema version is kept in SQLite's
`user_version`.

The functions in `shortlinks.database` are:

- `find_url(db, shortlink, needhits)` returns `(longlink, hits, expiry_time)`
  for an active link. Hits and expiry time are filled in only when
  `needhits` is true. All three are `None` when the link does not exist or
  has expired.
- `getall(db)` returns every active link, oldest first, as `LinkRow`
  objects. `LinkRow.to_dict()` gives the fields `shortlink`, `longlink`,
  `hits` and `expiry_time`.
- `add_hit(db, shortlink)` adds one to the hit counter.
- `add_link(db, shortlink, longlink, expiry_delay)` stores a link and
  returns its expiry time. It raises `sqlite3.IntegrityError` if the
  shortlink is already taken.
- `cleanup(db)` deletes expired links, logs what it removes, and returns
  the number deleted.
- `delete_link(db, shortlink)` returns whether a row was removed.

## Shortlinks

A shortlink may contain only lower-case letters, digits, `-` and `_`.
`links.validate_link` checks this. `links.get_longurl` and
`links.delete_link` do nothing for an invalid shortlink. They return
`(None, None, None)` and `False`.

`links.getall_json(db)` returns all active links as a compact JSON array.

## Creating links

`links.add_link(db, request, settings)` takes a JSON object with these keys:

- `longlink`: required.
- `shortlink`: optional.
- `expiry_delay`: optional, in seconds.

It returns `(shortlink, expiry_time)`.

If `shortlink` is missing or empty, one is generated with
`links.gen_link(style, length)`. The style comes from `LinkSettings.slug_style`:

- `SlugStyle.PAIR` is the default. It gives an adjective and a name joined
  by a hyphen, such as `happy-turing`.
- `SlugStyle.UID` gives `slug_length` random lower-case letters and digits.
  The default length is 8.

`SlugStyle` also accepts the strings `"Pair"` and `"UID"`. Any other value
is treated as `PAIR`.

An `expiry_delay` of `0` means the link never expires. When
`LinkSettings.public_mode` is on and `public_mode_expiry_delay` is above
zero, that delay is used when the request gives none. It is also the upper
limit for any delay the request does give. Every delay is then clamped to
the range from 0 to `links.MAX_EXPIRY_DELAY` (five years).

`links.add_link` raises `links.LinkError` with one of these messages. The
message is also available as `.reason`.

- `Invalid request!` when the request is not a JSON object with the right
  types.
- `Short URL is not valid!`
- `Short URL is already in use!` when a requested shortlink is taken.
- `Something went wrong!` for any other database failure.

## What this package does not do

This package has no HTTP server, no login or API-key checks, no web
frontend and no command-line program. It does not run cleanup on a
schedule either. You call `database.cleanup` yourself whenever you want
expired links removed.