"""
Tests for loading, validating and dumping profile documents.
"""

import pytest
from aiohttp.test_utils import TestServer

from xdiff.core.exceptions import ConfigParseError, NetworkError, ProfileNotFound, ValidationError
from xdiff.request.overrides import OverrideSet
from xdiff.request.profile import RequestProfile
from xdiff.store.config import DiffConfig, DiffProfile, RequestConfig, ResponseProfile


class TestRequestConfig:
    """Tests for xreq documents."""

    def test_load_fixture(self, fixtures_dir):
        config = RequestConfig.load_yaml(fixtures_dir / "xreq_test.yaml")

        assert set(config.profiles) == {"rust", "todo"}
        todo = config.get_profile("todo")
        assert todo.method == "POST"
        assert todo.params == {"a": 1}
        assert todo.body == {"title": "write tests", "completed": False}
        assert config.get_profile("rust").method == "GET"

    def test_params_must_be_object(self):
        content = "bad:\n  url: http://localhost/\n  params: [1, 2]\n"

        with pytest.raises(ValidationError, match="'bad'"):
            RequestConfig.from_yaml(content)

    def test_body_must_be_object(self):
        content = "bad:\n  url: http://localhost/\n  body: hello\n"

        with pytest.raises(ValidationError, match="body"):
            RequestConfig.from_yaml(content)

    def test_malformed_yaml(self):
        with pytest.raises(ConfigParseError, match="Failed to parse"):
            RequestConfig.from_yaml("todo: [unclosed")

    def test_document_must_be_mapping(self):
        with pytest.raises(ConfigParseError, match="mapping"):
            RequestConfig.from_yaml("- a\n- b\n")

    def test_missing_url(self):
        with pytest.raises(ConfigParseError, match="Invalid xreq config"):
            RequestConfig.from_yaml("todo:\n  method: GET\n")

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigParseError, match="Failed to read"):
            RequestConfig.load_yaml(temp_dir / "missing.yaml")

    def test_empty_document(self):
        assert RequestConfig.from_yaml("").profiles == {}

    def test_profile_not_found(self, fixtures_dir):
        config = RequestConfig.load_yaml(fixtures_dir / "xreq_test.yaml")

        with pytest.raises(ProfileNotFound, match="Profile nope not found") as excinfo:
            config.get_profile("nope")

        assert "xreq_test.yaml" in str(excinfo.value)
        assert excinfo.value.details["available"] == ["rust", "todo"]

    def test_to_yaml_round_trip(self):
        profile = RequestProfile.from_url("http://host/todo?a=1&b=2")
        config = RequestConfig(profiles={"todo": profile})

        text = config.to_yaml()
        loaded = RequestConfig.from_yaml(text)

        assert "headers" not in text
        assert "body" not in text
        assert loaded.get_profile("todo").params == {"a": 1, "b": 2}
        assert loaded.get_profile("todo").url == "http://host/todo"


class TestDiffConfig:
    """Tests for xdiff documents."""

    def test_load_fixture(self, fixtures_dir):
        config = DiffConfig.load_yaml(fixtures_dir / "xdiff_test.yaml")

        todo = config.get_profile("todo")
        assert todo.res.skip_body == ["id"]
        assert todo.req1.params == {"a": 100}
        assert config.get_profile("rust").req2.params == {}

    def test_res_defaults_to_empty(self):
        content = "p:\n  req1:\n    url: http://a/\n  req2:\n    url: http://b/\n"

        profile = DiffConfig.from_yaml(content).get_profile("p")

        assert profile.res == ResponseProfile()

    def test_invalid_request_in_pair(self):
        content = "p:\n  req1:\n    url: http://a/\n  req2:\n    url: http://b/\n    params: 3\n"

        with pytest.raises(ValidationError, match="p.req2"):
            DiffConfig.from_yaml(content)

    def test_to_yaml_round_trip(self):
        profile = DiffProfile(
            req1=RequestProfile.from_url("http://a/x?id=1"),
            req2=RequestProfile.from_url("http://b/x?id=2"),
            res=ResponseProfile(skip_headers=["date"]),
        )

        text = DiffConfig(profiles={"pair": profile}).to_yaml()
        loaded = DiffConfig.from_yaml(text).get_profile("pair")

        assert loaded.res.skip_headers == ["date"]
        assert "skip_body" not in text
        assert loaded.req2.params == {"id": 2}


class TestDiffProfile:
    """End-to-end comparisons against a local server."""

    @pytest.mark.asyncio
    async def test_diff_shows_changed_title(self, app):
        async with TestServer(app) as server:
            profile = DiffProfile(
                req1=RequestProfile(url=str(server.make_url("/todos/1"))),
                req2=RequestProfile(url=str(server.make_url("/todos/2"))),
                res=ResponseProfile(skip_headers=["date"], skip_body=["id"]),
            )

            output = await profile.diff()

        lines = output.splitlines()
        changed = [line for line in lines if line[10] in "-+"]
        assert len(changed) == 2
        assert '"title": "todo"' in changed[0]
        assert '"title": "done"' in changed[1]
        assert '"id"' not in output

    @pytest.mark.asyncio
    async def test_identical_responses(self, app):
        async with TestServer(app) as server:
            url = str(server.make_url("/todos/1"))
            profile = DiffProfile(
                req1=RequestProfile(url=url),
                req2=RequestProfile(url=url),
                res=ResponseProfile(skip_headers=["date"]),
            )

            assert await profile.diff(OverrideSet.from_tokens(["a=1"])) == ""

    @pytest.mark.asyncio
    async def test_failure_in_one_request_aborts(self, app):
        async with TestServer(app) as server:
            profile = DiffProfile(
                req1=RequestProfile(url=str(server.make_url("/todos/1"))),
                req2=RequestProfile(url="http://127.0.0.1:1/down"),
            )

            with pytest.raises(NetworkError):
                await profile.diff()
