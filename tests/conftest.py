import httpx
import pytest


class FakeTSheets:
    """In-memory stand-in for the TSheets REST API, served over httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.user = {"id": 1234, "first_name": "Ada", "last_name": "Lovelace"}
        self.jobcodes = {
            "17": {"id": 17, "name": "Design", "active": True},
            "18": {"id": 18, "name": "Support", "active": True},
            "19": {"id": 19, "name": "Archived", "active": False},
        }
        self.create_status = 200
        self.edit_status = 200
        self.timesheet_pages: list[list[dict]] = [[]]
        self.failing: dict[str, int] = {}
        self.down: set[str] = set()
        self.garbage: set[str] = set()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, endpoint: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path.endswith(endpoint)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        if endpoint in self.down:
            raise httpx.ConnectError("connection refused", request=request)
        if endpoint in self.garbage:
            return httpx.Response(200, text="<html>maintenance</html>")
        if endpoint in self.failing:
            return httpx.Response(self.failing[endpoint], json={"error": "nope"})

        if endpoint == "current_user":
            return httpx.Response(200, json={"results": {"users": {str(self.user["id"]): self.user}}})
        if endpoint == "jobcode_assignments":
            return httpx.Response(200, json={
                "results": {"jobcode_assignments": {}},
                "supplemental_data": {"jobcodes": self.jobcodes},
            })
        if endpoint == "timesheets" and request.method == "GET":
            page = int(request.url.params.get("page", "1"))
            items = self.timesheet_pages[page - 1]
            timesheets = {str(item["id"]): item for item in items} if items else []
            return httpx.Response(200, json={
                "results": {"timesheets": timesheets},
                "more": page < len(self.timesheet_pages),
            })
        if endpoint == "timesheets" and request.method == "POST":
            return httpx.Response(200, json={"results": {"timesheets": {"1": {
                "_status_code": self.create_status, "id": 555,
            }}}})
        if endpoint == "timesheets" and request.method == "PUT":
            return httpx.Response(200, json={"results": {"timesheets": {"1": {
                "_status_code": self.edit_status,
            }}}})
        return httpx.Response(404)


@pytest.fixture
def tsheets():
    return FakeTSheets()
