import pytest
import requests

from hlsrec.exceptions import PlaylistError, StreamError
from hlsrec.session.http import HTTPSession


URL = "http://test.se/file"


@pytest.fixture()
def http():
    return HTTPSession()


def test_get_bytes(http, requests_mock):
    requests_mock.get(URL, content=b"payload")

    assert http.get_bytes(URL) == b"payload"


def test_timeout(http, requests_mock):
    mock = requests_mock.get(URL, content=b"")
    http.timeout = 7.5

    http.get(URL)
    assert mock.last_request.timeout == 7.5

    http.get(URL, timeout=1)
    assert mock.last_request.timeout == 1


def test_status_error(http, requests_mock):
    requests_mock.get(URL, status_code=404)

    with pytest.raises(StreamError, match="Unable to open URL: http://test.se/file") as cm:
        http.get(URL)
    assert isinstance(cm.value.err, requests.HTTPError)


def test_status_error_custom_exception(http, requests_mock):
    requests_mock.get(URL, status_code=500)

    with pytest.raises(PlaylistError):
        http.get(URL, exception=PlaylistError)


def test_acceptable_status(http, requests_mock):
    requests_mock.get(URL, status_code=404, text="not found")

    assert http.get(URL, acceptable_status=[404]).text == "not found"
    assert http.get(URL, raise_for_status=False).status_code == 404


def test_connection_error(http, requests_mock):
    requests_mock.get(URL, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(StreamError, match="refused"):
        http.get_bytes(URL)
