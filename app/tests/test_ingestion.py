"""Property review ingestion and fallback tests"""

import httpx
import pytest

from app.core.errors import ConfigurationError, UpstreamError
from app.ingestion.base import extract_review_records
from app.ingestion.fixture_source import HostawayFixtureSource
from app.ingestion.hostaway_source import HostawayAPISource
from app.ingestion.runner import IngestionRunner
from conftest import RecordingTransport, json_transport, make_review


def live_source(transport, account_id="61148", api_key="secret"):
    return HostawayAPISource(account_id=account_id, api_key=api_key, transport=transport)


class TestExtractReviewRecords:
    """Envelope lookup priority"""

    def test_result_before_reviews(self):
        """Test result wins over reviews"""
        tag, records = extract_review_records({"result": [1], "reviews": [2]})
        assert (tag, records) == ("result", [1])

    def test_reviews_when_result_not_a_list(self):
        """Test reviews is used when result is not a list"""
        tag, records = extract_review_records({"result": None, "reviews": [2]})
        assert (tag, records) == ("reviews", [2])

    def test_bare_list(self):
        """Test a bare list is accepted"""
        assert extract_review_records([1, 2]) == ("list", [1, 2])

    def test_nothing_matches(self):
        """Test unrecognized documents yield no records"""
        assert extract_review_records({"status": "success"}) == ("none", [])


class TestHostawayAPISource:
    """Live Hostaway fetch"""

    @pytest.mark.asyncio
    async def test_fetch_sends_credentials(self):
        """Test credentials and paging go upstream"""
        transport = json_transport({"status": "success", "result": [make_review(1, "A")]})
        records = await live_source(transport).fetch()

        assert records[0]["id"] == 1
        request = transport.requests[0]
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["X-Account-Id"] == "61148"
        assert request.url.params["accountId"] == "61148"
        assert request.url.params["limit"] == "100"

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        """Test missing credentials fail before any request"""
        transport = json_transport({"result": []})
        with pytest.raises(ConfigurationError) as exc_info:
            await live_source(transport, api_key=None).fetch()
        assert exc_info.value.code == "MISSING_CREDENTIALS"
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_http_error(self):
        """Test non-2xx maps to HTTP_<status>"""
        with pytest.raises(UpstreamError) as exc_info:
            await live_source(json_transport({"message": "Unauthorized"}, status_code=403)).fetch()
        assert exc_info.value.code == "HTTP_403"

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test transport failure maps to NETWORK"""

        def boom(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            await live_source(RecordingTransport(boom)).fetch()
        assert exc_info.value.code == "NETWORK"

    @pytest.mark.asyncio
    async def test_non_json_success_is_a_parse_error(self):
        """Test a 2xx body that is not JSON maps to PARSE, not an empty result"""
        transport = RecordingTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(UpstreamError) as exc_info:
            await live_source(transport).fetch()
        assert exc_info.value.code == "PARSE"
        assert exc_info.value.extra["raw"] == "<html>maintenance</html>"


class TestHostawayFixtureSource:
    """Bundled fixture reads"""

    @pytest.mark.asyncio
    async def test_reads_bundled_fixture(self, fixture_path):
        """Test the bundled fixture is read"""
        source = HostawayFixtureSource(fixture_path)
        records = await source.fetch()
        assert len(records) == 6
        assert source.endpoint == "mock:hostaway_reviews.json"

    @pytest.mark.asyncio
    async def test_reviews_envelope(self, write_fixture):
        """Test a reviews envelope is read"""
        path = write_fixture([make_review(1, "A")], envelope="reviews")
        assert len(await HostawayFixtureSource(path).fetch()) == 1

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing fixture raises"""
        with pytest.raises(FileNotFoundError):
            await HostawayFixtureSource(tmp_path / "absent.json").fetch()

    @pytest.mark.asyncio
    async def test_unrecognized_document(self, tmp_path):
        """Test an unrecognized fixture document raises"""
        path = tmp_path / "reviews.json"
        path.write_text('{"status": "success"}')
        with pytest.raises(ValueError):
            await HostawayFixtureSource(path).fetch()


class TestIngestionRunner:
    """Live first, fixture fallback"""

    @pytest.mark.asyncio
    async def test_no_primary_uses_fixture(self, write_fixture):
        """Test fixture is used without a live source"""
        runner = IngestionRunner(fallback=HostawayFixtureSource(write_fixture([make_review(1, "A")])))
        batch = await runner.run()
        assert batch.mode == "mock"
        assert batch.endpoint == "mock:reviews.json"
        assert len(batch.records) == 1

    @pytest.mark.asyncio
    async def test_live_success(self, write_fixture):
        """Test live data is used when available"""
        transport = json_transport({"result": [make_review(1, "A"), make_review(2, "B")]})
        runner = IngestionRunner(
            fallback=HostawayFixtureSource(write_fixture([])),
            primary=live_source(transport),
        )
        batch = await runner.run()
        assert batch.mode == "live"
        assert batch.endpoint.startswith("https://api.hostaway.com/v1/reviews?accountId=61148")
        assert len(batch.records) == 2

    @pytest.mark.asyncio
    async def test_falls_back_on_missing_credentials(self, write_fixture):
        """Test missing credentials fall back to the fixture"""
        runner = IngestionRunner(
            fallback=HostawayFixtureSource(write_fixture([make_review(1, "A")])),
            primary=live_source(json_transport({"result": []}), account_id=None),
        )
        assert (await runner.run()).mode == "mock"

    @pytest.mark.asyncio
    async def test_falls_back_on_upstream_status(self, write_fixture):
        """Test upstream HTTP errors fall back to the fixture"""
        runner = IngestionRunner(
            fallback=HostawayFixtureSource(write_fixture([make_review(1, "A")])),
            primary=live_source(json_transport({"message": "down"}, status_code=500)),
        )
        batch = await runner.run()
        assert batch.mode == "mock"
        assert len(batch.records) == 1

    @pytest.mark.asyncio
    async def test_network_failure_is_not_masked(self, write_fixture):
        """Test network failures propagate"""
        def boom(request):
            raise httpx.ConnectError("refused", request=request)

        runner = IngestionRunner(
            fallback=HostawayFixtureSource(write_fixture([make_review(1, "A")])),
            primary=live_source(RecordingTransport(boom)),
        )
        with pytest.raises(UpstreamError):
            await runner.run()
