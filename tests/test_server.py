import json
import sqlite3
import threading
import urllib.error
import urllib.request

import pytest

from mycrib.http import error_response
from mycrib.server import answer_connection, build_router, main, make_server


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "movies.db"
    with sqlite3.connect(path) as connection:
        connection.execute(
            'CREATE TABLE movies (id INTEGER PRIMARY KEY, title TEXT, genre TEXT, '
            'year INTEGER, length INTEGER, poster_url TEXT, rating_family REAL, '
            '"cast" TEXT, director TEXT, rating_imdb REAL)'
        )
        connection.execute(
            "INSERT INTO movies VALUES (1, 'Alien', 'Horror', 1979, 117, 'alien.jpg', "
            "3.5, 'Sigourney Weaver', 'Ridley Scott', 8.5)"
        )
    connection.close()
    return path


@pytest.fixture
def live_server(db_path):
    server = make_server("127.0.0.1", 0, build_router(db_path), None, None)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


def test_disallowed_method_gets_405_template():
    response = answer_connection(build_router(), "DELETE", "/", {}, b"")
    assert response.status == 405
    assert response.body == b'{"status": 405, "result": "Method Not Allowed"}'


def test_root_via_answer_connection():
    response = answer_connection(build_router(), "GET", "/")
    assert response.status == 200
    assert json.loads(response.body)["result"] == "['/', '/movies']"


def test_post_to_root_is_405_from_handler():
    response = answer_connection(build_router(), "POST", "/")
    assert response.status == 405


def test_unknown_route_is_404():
    response = answer_connection(build_router(), "GET", "/nowhere")
    assert response.body == error_response(404).body


def test_movies_uses_router_database(db_path):
    response = answer_connection(
        build_router(db_path), "GET", "/movies", {"search_pattern": "Ali"}
    )
    document = json.loads(response.body)
    assert response.status == 200
    assert [m["title"] for m in document["result"]] == ["Alien"]


def test_post_to_movies_is_internal_error(db_path):
    response = answer_connection(build_router(db_path), "POST", "/movies", {}, b"{}")
    assert response.status == 500


def test_make_server_requires_cert_and_key_together():
    with pytest.raises(ValueError):
        make_server("127.0.0.1", 0, build_router(), "cert.pem", None)


def test_live_server_answers_movies(live_server):
    url = live_server + "/movies?search_pattern=Alien&search_type=exact"
    with urllib.request.urlopen(url) as reply:
        assert reply.status == 200
        assert reply.headers["Content-Type"] == "application/json"
        document = json.loads(reply.read())
    assert document["result"][0]["director"] == "Ridley Scott"


def test_live_server_not_found(live_server):
    with pytest.raises(urllib.error.HTTPError) as info:
        urllib.request.urlopen(live_server + "/nowhere")
    assert info.value.code == 404


def test_main_fails_without_certificates(tmp_path, capsys):
    code = main(
        ["--cert", str(tmp_path / "none.pem"), "--key", str(tmp_path / "none.key")]
    )
    assert code == 1
    assert "the key/certificate files could not be read." in capsys.readouterr().out