# The MIT License (MIT)

# Copyright (c) 2015-2021 Rapptz
# Copyright (c) 2021-present Pycord Development

# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.

# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
# OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.
# ? route and response handling adapted from py-cord, without the rate limiter
from __future__ import annotations
from slashkit.errors import RemoteRejection, NetworkFailure, RateLimited, ServerError, AuthFailure
from aiohttp import __version__ as aiohttp_version, ClientError
from slashkit.version import API_VERSION, VERSION
from orjson import dumps, loads, JSONDecodeError
from binascii import Error as BinasciiError
from typing import TYPE_CHECKING, Any
from re import match, IGNORECASE
from urllib.parse import quote
from base64 import b64decode
from sys import version_info
import logfire

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


__all__ = (
    'BASE_URL',
    'USER_AGENT',
    'Route',
    'application_id_from_token',
    'json_or_text',
    'request',
)


BASE_URL = f'https://discord.com/api/v{API_VERSION}'
USER_AGENT = ' '.join([
    f'DiscordBot (https://github.com/slashkit/slashkit, {VERSION})',
    f'Python/{'.'.join([str(i) for i in version_info[:3]])}',
    f'aiohttp/{aiohttp_version}'
])


class Route:
    def __init__(
        self,
        method: str,
        path: str,
        base_url: str = BASE_URL,
        **params  # noqa: ANN003
    ) -> None:
        self.method = method
        self.path = path
        url = base_url.rstrip('/') + path

        self.url = url.format(**{
            k: quote(v) if isinstance(v, str) else v
            for k, v in params.items()
        }) if params else url

    def __repr__(self) -> str:
        return f'<Route {self.method} {self.url}>'


def application_id_from_token(token: str) -> int:
    """the first segment of a bot token is the base64 encoded application id"""
    m = match(
        r'^(([a-z0-9_-]{17,28})\.[a-z0-9_-]{6,7}\.(?:[a-z0-9_-]{27}|[a-z0-9_-]{38}))$',
        token,
        IGNORECASE
    )

    if m is None:
        raise ValueError('invalid token format')

    try:
        return int(b64decode(f'{m.group(2)}==').decode())
    except (BinasciiError, UnicodeDecodeError, ValueError) as e:
        raise ValueError('invalid token format') from e


async def json_or_text(response: ClientResponse) -> Any:  # noqa: ANN401
    text = await response.text(encoding='utf-8')

    if response.content_type == 'application/json':
        try:
            return loads(text)
        except JSONDecodeError:
            pass

    return text


async def request(
    session: ClientSession,
    route: Route,
    *,
    token: str,
    json: dict[str, Any] | list[Any] | None = None,
    reason: str | None = None,
) -> Any:  # noqa: ANN401
    """send one request, non-2xx responses raise, nothing is retried"""
    headers: dict[str, str] = {
        'User-Agent': USER_AGENT,
        'Authorization': f'Bot {token}'
    }

    data = None
    if json is not None:
        headers['Content-Type'] = 'application/json'
        data = dumps(json)

    if reason:
        headers['X-Audit-Log-Reason'] = quote(reason, safe='/ ')

    logfire.debug('{method} {url}', method=route.method, url=route.url)

    try:
        async with session.request(
            route.method,
            route.url,
            data=data,
            headers=headers,
        ) as response:
            resp_data = await json_or_text(response)
            status = response.status
    except (ClientError, OSError, TimeoutError) as e:
        raise NetworkFailure(f'{route.method} {route.url} failed: {e!r}') from e

    if 300 > status >= 200:
        return resp_data

    match status:
        case 401 | 403:
            raise AuthFailure(resp_data, status)
        case 429:
            raise RateLimited(resp_data, status)
        case _ if status >= 500:
            raise ServerError(resp_data, status)
        case _:
            raise RemoteRejection(resp_data, status)
