import base64
import binascii
import json
import time
import logging

from shortlinker.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinker.service import ShortlinkService
from shortlinker.dao.redis import ShortlinkRedisDAO, URLHashRedisDAO
from shortlinker.dao.exceptions import DataStoreError
from shortlinker.exceptions import ConfigurationError, ValidationError
from shortlinker.constants import MAX_EXPIRATION_IN_MINUTES, CONFIGURATION_ERROR, DATA_STORE_ERROR
from shortlinker.utils import load_config, redis_config, app_prefix, storage_timeout, duration_ms, guarantee_500_response
from shortlinker.utils.responses import response_201, response_400, response_500
from shortlinker.lambdas.shorten_url.constants import INVALID_JSON_BODY, INVALID_REQUEST, SHORTEN_SUCCESS


logger = logging.getLogger(__name__)


def parse_shorten_request(event: LambdaEvent) -> tuple[str, int]:
    """Extract (url, expiration_in_minutes) from a shorten request body

    `expiration_in_minutes` defaults to 0 (never expires) when omitted.

    Raises:
        json.JSONDecodeError:
            If the body is not valid JSON.
        ValidationError:
            If the body is not a JSON object, `url` is missing, empty or not
            encodable as UTF-8, or `expiration_in_minutes` is not an integer
            in [0, MAX_EXPIRATION_IN_MINUTES].
    """
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        try:
            body = base64.b64decode(body).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise json.JSONDecodeError('Body is not valid base64 encoded UTF-8', str(body), 0) from e

    request_body = json.loads(body)
    if not isinstance(request_body, dict):
        raise ValidationError('JSON body must be an object')

    url = request_body.get('url')
    if not isinstance(url, str) or not url:
        raise ValidationError("missing 'url' in JSON body")
    try:
        # JSON escapes may decode to lone surrogates
        url.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValidationError("'url' is not valid UTF-8") from e

    expiration_in_minutes = request_body.get('expiration_in_minutes', 0)
    # bool is an int subclass, reject it explicitly
    if not isinstance(expiration_in_minutes, int) or isinstance(expiration_in_minutes, bool) or expiration_in_minutes < 0:
        raise ValidationError("'expiration_in_minutes' must be a non-negative integer")
    if expiration_in_minutes > MAX_EXPIRATION_IN_MINUTES:
        raise ValidationError(f"'expiration_in_minutes' must not exceed {MAX_EXPIRATION_IN_MINUTES}")

    return url, expiration_in_minutes


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs (POST /api/shorten)

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the application's config
    - Step 2: Extract and validate url and expiration_in_minutes from request body
    - Step 3: Get or create the shortcode (via ShortlinkService)
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Shortlink issued (or reused)
            shortlink: shortcode
        400: Bad client request
            message: invalid JSON body or failed validation
        500: Internal server error
            message: configuration or data store failure

    Example:
        >>> event = {'body': '{"url": "http://example.com", "expiration_in_minutes": 60}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])
        {'shortlink': '1'}
    """
    started = time.perf_counter()

    # 1- Get application's config
    try:
        app_config = load_config('shorten_url')
        redis_kwargs = redis_config(app_config)
    except ConfigurationError as error:
        logger.exception(
            'Failed to load configuration for shorten URL function. Responding with 500.',
            extra={'event': CONFIGURATION_ERROR, 'error': error.__class__.__name__, 'statusCode': 500},
        )
        return response_500()

    # 2- Extract url and expiration from request body
    try:
        url, expiration_in_minutes = parse_shorten_request(event)
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY, 'statusCode': 400})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    except ValidationError as error:
        logger.info(
            'Shorten request failed validation. Responding with 400.',
            extra={'event': INVALID_REQUEST, 'reason': str(error), 'statusCode': 400},
        )
        return response_400(message=str(error), error_code=INVALID_REQUEST)

    # 3- Get or create the shortcode
    try:
        timeout = storage_timeout(context)
        shortlink_dao = ShortlinkRedisDAO(**redis_kwargs, redis_socket_timeout=timeout, prefix=app_prefix())
        url_hash_dao = URLHashRedisDAO(redis_client=shortlink_dao.redis, prefix=app_prefix())
        shortcode = ShortlinkService(shortlink_dao, url_hash_dao).shorten(url, expiration_in_minutes)
    except DataStoreError as error:
        logger.exception(
            'Data store failure while shortening URL. Responding with 500.',
            extra={'event': DATA_STORE_ERROR, 'reason': str(error), 'statusCode': 500},
        )
        return response_500(error_code=DATA_STORE_ERROR)

    # 4- Return created response to user
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={
            'shortcode': shortcode,
            'expirationInMinutes': expiration_in_minutes,
            'event': SHORTEN_SUCCESS,
            'durationMs': duration_ms(started),
        },
    )
    return response_201({'shortlink': shortcode})
