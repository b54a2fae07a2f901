# mycrib

A small HTTPS server that answers JSON queries against a SQLite catalogue of
movies. It needs nothing beyond the standard library.

## Installing

```
pip install .
```

## Running the server

```
mycrib
```

The server speaks TLS and listens on port 8080 on all addresses. It takes
these options:

| option   | meaning                          | default              |
|----------|----------------------------------|----------------------|
| `--host` | address to bind                  | all addresses        |
| `--port` | port to listen on                | `8080`               |
| `--cert` | PEM certificate                  | `../pki/mycrib.pem`  |
| `--key`  | PEM private key                  | `../pki/mycrib.key`  |
| `--db`   | SQLite database                  | `../sql/mycrib.db`   |

If the certificate or key cannot be read, or is empty, the command prints
`the key/certificate files could not be read.` and exits with status 1. It
also exits with status 1 if the server cannot bind its address. Stop it with
Ctrl+C or SIGTERM.

## Endpoints

Every response is sent with `Content-Type: application/json`.

Only `GET` and `POST` requests are accepted. Any other method gets
`405` with the body `{"status": 405, "result": "Method Not Allowed"}`. A request
path longer than 64 bytes gets `400`, and an unknown path gets `404`, with
bodies of the same shape.

### `GET /`

This lists the available routes:

```json
{"status": 200, "result": "['/', '/movies']"}
```

A `POST` to `/` gets `{"status": 405, "result": "Method Not Allowed"}`.

### `GET /movies`

This searches the `movies` table. It takes these query parameters:

| parameter        | meaning                                                      | default    |
|------------------|--------------------------------------------------------------|------------|
| `search_pattern` | the text to search for (required)                            | –          |
| `search_type`    | one of `contains`, `startswith`, `endswith`, `exact`         | `contains` |
| `search_by`      | the column to search, such as `title`, `cast` or `director`  | `title`    |

The search type is matched by its prefix, so a value such as `exactly` counts
as `exact`. The `LIKE`-based types follow SQLite's rules for `LIKE`.

Example:

```
curl -k "https://localhost:8080/movies?search_pattern=Alien&search_type=startswith"
```

A successful search returns `{"status": 200, "result": [...]}`. Each record
holds `title`, `genre`, `year`, `length`, `poster_url`, `rating_family`,
`cast`, `director` and `rating_imdb`. Rows with an empty text column are
left out.

Errors:

- no `search_pattern`: `{"status": 400, "error": "A search pattern must be provided"}`
- unknown search type: `{"status": 400, "error": "Unsupported search type"}`
- a `search_by` value that is not a plain column name, or a database that
  cannot be opened or queried: `{"status": 500, "error": "Internal Server Error"}`
- a `POST` to `/movies`: status 500 with the body `Internal Server Error`

## What it does not do

The package only reads the catalogue. It does not create the database or the
`movies` table, and it has no way to add, change or delete movies.

## Using it as a library

The pieces can be used on their own:

```python
from mycrib.handler import RequestContext, root_handler
from mycrib.route import Router
from mycrib.server import answer_connection, build_router

router = Router()
router.add("/", root_handler)
response = router.dispatch(RequestContext(method="GET", url="/"))
print(response.status, response.body)  # 200 b'{"status": 200, ...}'

# Both routes, searching a database of your choice:
router = build_router("movies.db")
response = answer_connection(router, "GET", "/movies", {"search_pattern": "Alien"})
```

- `mycrib.db.read_movies(search_pattern, search_type, search_by, path)` runs a
  search and returns the response document as a dict; it raises
  `mycrib.db.DatabaseError` when the database fails.
- `mycrib.server.make_server(host, port, router, certfile, keyfile)` returns a
  threaded `http.server` server; with a certificate and key it speaks TLS,
  without both it speaks plain HTTP.
- `mycrib.util.small_crc16_8005(data)` is the CRC-16 the router keys its paths
  by. Two paths with the same checksum share one slot, and the later one wins.

## Tests

```
pip install ".[test]"
pytest
```