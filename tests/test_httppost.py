import pytest

from httperrors import AddressParseError
from httppost import build_post, http_post, main
from httpaddr import parse
from httpresponse import status_code
from httptitle import extract_title


def test_build_post():
    address = parse("http://example.com:8000/form")
    assert build_post(address, "name=caf%c3%a9") == [
        "POST http://example.com:8000/form HTTP/1.0",
        "Host: example.com:8000",
        "Accept: */*",
        "Content-Type: application/x-www-form-urlencoded",
        "Content-Length: 14",
        "",
    ]


def test_post_wire_format(canned):
    http_post(f"http://127.0.0.1:{canned.port}/form", {"a": "1 2"})

    assert canned.requests[0].endswith(b"Content-Length: 7\r\n\r\na=1%202")
    assert canned.requests[0].startswith(f"POST http://127.0.0.1:{canned.port}/form HTTP/1.0\r\n".encode())


def test_post_form(site):
    lines = http_post(site + "/form", {"name": "Ada Lovelace", "message": "hi & bye"})
    assert status_code(lines) == 200
    assert extract_title(lines) == "Thanks Ada Lovelace"


def test_post_bad_url():
    with pytest.raises(AddressParseError):
        http_post("/form", {})


def test_cli(site, capsys):
    assert main(["--url", site + "/form", "--form-param", "name=Grace", "message=hello"]) == 0
    out = capsys.readouterr().out
    assert "Status Code: 200" in out
    assert 'Title: "Thanks Grace"' in out


def test_cli_reports_redirect_location(canned, capsys):
    canned.responses = [b"HTTP/1.1 302 Found\r\nLocation: /done\r\n\r\n"]
    assert main(["--url", f"http://127.0.0.1:{canned.port}/form", "--form-param", "x=1"]) == 0
    out = capsys.readouterr().out
    assert "Status Code: 302" in out
    assert "Location: /done" in out


def test_cli_connection_error(closed_port, capsys):
    assert main(["--url", f"http://127.0.0.1:{closed_port}/form"]) == 1
    assert capsys.readouterr().out.startswith("Error:")
