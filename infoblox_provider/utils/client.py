"""All interactions with infoblox."""

from __future__ import annotations

import json
import logging
import re
import urllib.parse
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth
from requests.compat import urljoin
from requests.exceptions import HTTPError

from infoblox_provider.constant import DEFAULT_MAX_RESULTS
from infoblox_provider.exceptions import InvalidUrlScheme, RequestConnectError
from infoblox_provider.models import IBObject

logger = logging.getLogger("infoblox_provider.client")


def parse_url(address):
    """Handle outside case where protocol isn't included in URL address.

    Args:
        address (str): URL set by end user for Infoblox instance.

    Returns:
        ParseResult: The parsed results from urllib.
    """
    if not re.search(r"^[A-Za-z0-9+.\-]+://", address):
        address = f"https://{address}"
    return urllib.parse.urlparse(address)


class QueryParams:
    """Search parameters for a WAPI object fetch.

    Args:
        force_proxy (bool): Ask the Grid Member to proxy the search to the Grid Master.
        search_fields (dict): WAPI search fields, e.g. {"network_view": "default"}.
    """

    def __init__(self, force_proxy: bool = False, search_fields: Optional[dict] = None):
        """Initialize query parameters."""
        self.force_proxy = force_proxy
        self.search_fields = dict(search_fields or {})

    def params(self) -> dict:
        """Return the query string parameters for requests."""
        params = dict(self.search_fields)
        if self.force_proxy:
            params["_proxy_search"] = "GM"
        return params

    def __repr__(self):
        """Represent the query parameters."""
        return f"QueryParams(force_proxy={self.force_proxy}, search_fields={self.search_fields})"


class InfobloxApi:  # pylint: disable=too-many-instance-attributes
    """Representation and methods for interacting with Infoblox."""

    def __init__(
        self,
        url,
        username,
        password,
        verify_ssl,
        wapi_version,
        timeout,
        debug=False,
        pool_connections=10,
        cookie=None,
    ):  # pylint: disable=too-many-arguments
        """Initialize Infoblox class."""
        parsed_url = parse_url(url.strip())
        if parsed_url.scheme != "https":
            if parsed_url.scheme == "http":
                self.url = parsed_url._replace(scheme="https").geturl()
            else:
                raise InvalidUrlScheme(scheme=parsed_url.scheme)
        else:
            self.url = parsed_url.geturl()
        self.auth = HTTPBasicAuth(username, password)
        self.wapi_version = wapi_version if str(wapi_version).startswith("v") else f"v{wapi_version}"
        self.timeout = timeout
        self.pool_connections = pool_connections
        self.session = self._init_session(verify_ssl=verify_ssl, cookie=cookie)
        # Change logging level to Debug if debug is requested by the caller
        logging_level = logging.DEBUG if debug else logging.INFO
        logger.setLevel(logging_level)
        for handler in logger.handlers:
            handler.setLevel(logging_level)

    def _init_session(self, verify_ssl: bool, cookie: Optional[dict]) -> requests.Session:
        """Initialize requests Session object that is used across all the API calls.

        Args:
            verify_ssl (bool): whether to verify SSL cert for https calls
            cookie (dict): optional dict with cookies to set on the Session object

        Returns:
            initialized session object
        """
        if verify_ssl is False:
            requests.packages.urllib3.disable_warnings(  # pylint: disable=no-member
                requests.packages.urllib3.exceptions.InsecureRequestWarning  # pylint: disable=no-member
            )  # pylint: disable=no-member
        self.headers = {"Content-Type": "application/json"}
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=self.pool_connections, pool_maxsize=self.pool_connections)
        session.mount("https://", adapter)
        if cookie and isinstance(cookie, dict):
            session.cookies.update(cookie)
        session.verify = verify_ssl
        session.headers.update(self.headers)
        session.auth = self.auth

        return session

    def _request(self, method, path, **kwargs):
        """Return a response object after making a request by a specified method.

        Args:
            method (str): Request HTTP method to call with Session.request.
            path (str): URL path to call.

        Returns:
            :class:`~requests.Response`: Response from the API.
        """
        api_path = f"/wapi/{self.wapi_version}/{path}"
        url = urljoin(self.url, api_path)

        if self.session.cookies.get("ibapauth"):
            self.session.auth = None
        else:
            self.session.auth = self.auth

        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.ConnectionError as err:
            logger.error("Unable to connect to Infoblox at %s: %s", self.url, err)
            raise RequestConnectError(f"Unable to connect to Infoblox at {self.url}: {err}") from err
        # Infoblox provides meaningful error messages for error codes >= 400
        err_msg = "HTTP error while talking to Infoblox API."
        if resp.status_code >= 400:
            try:
                err_msg = resp.json()
            except json.decoder.JSONDecodeError:
                err_msg = resp.text
            logger.error(err_msg)
        # Default error message does not have enough context.
        try:
            resp.raise_for_status()
        except HTTPError as err:
            exc_msg = f"{str(err)}. {err_msg}"
            raise HTTPError(exc_msg, response=err.response) from err
        return resp

    def get_object(
        self, obj: IBObject, ref: str = "", query_params: Optional[QueryParams] = None
    ) -> Optional[List[IBObject]]:
        """Fetch objects of the type of `obj` matching the query parameters.

        Results are paged through with `_paging` until the appliance stops returning a `next_page_id`.

        Args:
            obj (IBObject): Empty object describing the WAPI object type and the fields to return.
            ref (str): Reference of a single object to fetch. When set, query parameters are ignored.
            query_params (QueryParams): Search fields for the query.

        Returns:
            (list) of objects of the same type as `obj`, or None if the appliance returned null.

        Return Response:
        {
            "result": [
                {
                    "_ref": "network/ZG5zLm5ldHdvcmskMTAuMjIzLjAuMC8yMS8w:10.223.0.0/21/default",
                    "comment": "Data Center",
                    "extattrs": {"Site": {"value": "HQ"}},
                    "network": "10.223.0.0/21",
                    "network_view": "default",
                    "utilization": 250
                }
            ]
        }
        """
        model = type(obj)
        params = {"_return_fields": ",".join(obj.return_fields())}
        if ref:
            response = self._request("GET", ref, params=params)
            data = self._decode(response)
            if data is None:
                return None
            return [model.model_validate(data)]

        if query_params is None:
            query_params = QueryParams()
        params.update(query_params.params())
        params.update({"_paging": 1, "_return_as_object": 1, "_max_results": DEFAULT_MAX_RESULTS})

        records = []
        while True:
            response = self._request("GET", obj.object_type, params=params)
            data = self._decode(response)
            if data is None:
                return None
            records += data.get("result") or []
            next_page = data.get("next_page_id")
            if not next_page:
                break
            # The page id carries the original query, so follow-up requests send it alone
            params = {"_page_id": next_page}
        return [model.model_validate(rec) for rec in records]

    def get_network_views(self):
        """Get all network views.

        Returns:
            (list) of record dicts

        Return Response:
        [
          {
            "_ref": "networkview/ZG5zLm5ldHdvcmtfdmlldyQw:default/true",
            "extattrs": {},
            "is_default": true,
            "name": "default"
          },
          {
            "_ref": "networkview/ZG5zLm5ldHdvcmtfdmlldyQx:prod/false",
            "extattrs": {},
            "is_default": false,
            "name": "prod"
          }
        ]
        """
        url_path = "networkview"
        params = {
            "_return_fields": "name,extattrs,comment,is_default",
        }
        response = self._request("GET", url_path, params=params)
        return self._decode(response)

    @staticmethod
    def _decode(response):
        try:
            logger.debug(response.json())
            return response.json()
        except json.decoder.JSONDecodeError:
            logger.error(response.text)
            raise
