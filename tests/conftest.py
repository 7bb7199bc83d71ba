import json

import pytest

from netbook.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def collection_file(tmp_path):
    path = tmp_path / "collection.json"
    path.write_text(json.dumps([
        {
            "name": "Get user",
            "method": "GET",
            "url": "{{base_url}}/users/{{user_id}}",
            "headers": {"Accept": "application/json"},
        },
        {
            "name": "Create post",
            "method": "POST",
            "url": "{{base_url}}/posts",
            "body": {"title": "{{title}}", "userId": 1},
        },
        {
            "name": "Delete post",
            "method": "DELETE",
            "url": "https://api.example.com/posts/1",
        },
    ]))
    return path
