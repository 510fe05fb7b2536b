import warnings

from typed_http_client.config import WARNINGS_DISABLED, TypedHTTPClientWarning
from typed_http_client.http.client import HTTPClient, RequestExecutor
from typed_http_client.http.decoders import JSONDecoder
from typed_http_client.http.delivery import (
    EventLoopDeliveryContext,
    ExecutorDeliveryContext,
    ImmediateDeliveryContext,
    MainThreadDeliveryContext,
)
from typed_http_client.http.entities import (
    HTTPResponseMetadata,
    RawResponse,
    Request,
    ResponseMetadata,
)
from typed_http_client.http.errors import (
    ClientError,
    DecodingError,
    InvalidResponse,
    NetworkError,
    ResponseDetails,
)
from typed_http_client.http.sessions import AiohttpSession, RequestsSession
from typed_http_client.version import __version__

if WARNINGS_DISABLED:
    warnings.simplefilter("ignore", TypedHTTPClientWarning)
