import base64
from unittest.mock import MagicMock


def make_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.json.return_value = json_data if json_data is not None else {}
    return response


def readme_body(text, download_url="https://raw.githubusercontent.com/octocat/hello/main/README.md"):
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps the base64 body at 60 characters
    wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
    return {"content": wrapped, "encoding": "base64", "download_url": download_url}


USER_JSON = {
    "login": "octocat",
    "name": "The Octocat",
    "bio": "Mascot",
    "followers": 42,
    "following": 7,
    "public_repos": 2,
    "email": None,
    "avatar_url": "https://avatars.githubusercontent.com/u/583231",
    "site_admin": False,
}


def repo_json(name, **overrides):
    data = {
        "name": name,
        "description": f"{name} description",
        "language": "Python",
        "stargazers_count": 3,
        "forks_count": 1,
        "created_at": "2023-01-05T10:00:00Z",
        "updated_at": "2024-03-07T12:30:00Z",
        "topics": ["cli"],
        "owner": {"login": "octocat"},
        "html_url": f"https://github.com/octocat/{name}",
        "fork": False,
    }
    data.update(overrides)
    return data
