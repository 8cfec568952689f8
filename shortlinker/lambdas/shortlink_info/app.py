import re
import time
import logging

from shortlinker.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinker.models import ShortlinkModel
from shortlinker.service import ShortlinkService
from shortlinker.dao.redis import ShortlinkRedisDAO
from shortlinker.dao.exceptions import ShortlinkNotFoundError, DataStoreError
from shortlinker.exceptions import ConfigurationError
from shortlinker.constants import Shortcode, CONFIGURATION_ERROR, DATA_STORE_ERROR, INVALID_SHORTCODE, SHORTLINK_NOT_FOUND
from shortlinker.utils import load_config, redis_config, app_prefix, storage_timeout, get_short_url, duration_ms, guarantee_500_response
from shortlinker.utils.responses import response_200, response_400, response_404, response_500
from shortlinker.lambdas.shortlink_info.constants import MISSING_SHORTLINK, INFO_SUCCESS


logger = logging.getLogger(__name__)

SHORTCODE_RE = re.compile(Shortcode.PATTERN)


def info_body(shortlink: ShortlinkModel, event: LambdaEvent) -> dict:
    """Detail record of a shortlink plus its public short URL and expiry moment"""
    body = shortlink.detail()
    body['shortlink'] = shortlink.shortcode
    body['short_url'] = get_short_url(shortlink.shortcode, event)
    body['expires_at'] = shortlink.expires_at.isoformat() if shortlink.expires_at else None
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for shortlink details (GET /api/info?shortlink=CODE)

    This Lambda handler follows this procedure:
    - Step 1: Extract `shortlink` query parameter
    - Step 2: Load the application's config
    - Step 3: Read the shortlink's detail record
    - Step 4: Respond with 200 and the detail JSON

    HTTP responses:
        200: Shortlink found
            url, created_at, expiration_in_minutes, shortlink, short_url, expires_at
        400: `shortlink` query parameter missing
        404: Shortcode malformed, unknown or expired
        500: Internal server error

    Example:
        >>> event = {'queryStringParameters': {'shortlink': 'doesnotexist'}}
        >>> lambda_handler(event, None)['statusCode']
        404
    """
    started = time.perf_counter()

    # 1- Extract shortcode from query string
    shortcode = (event.get('queryStringParameters') or {}).get('shortlink')
    if not shortcode:
        logger.info(
            "Missing 'shortlink' query parameter. Responding with 400.",
            extra={'event': MISSING_SHORTLINK, 'statusCode': 400},
        )
        return response_400(message="missing 'shortlink' query parameter", error_code=MISSING_SHORTLINK)

    if not isinstance(shortcode, str) or not SHORTCODE_RE.fullmatch(shortcode):
        logger.info(
            'Invalid shortcode in query string. Responding with 404.',
            extra={'shortcode': shortcode, 'event': INVALID_SHORTCODE, 'statusCode': 404},
        )
        return response_404(error_code=INVALID_SHORTCODE)

    # 2- Get application's config
    try:
        app_config = load_config('shortlink_info')
        redis_kwargs = redis_config(app_config)
    except ConfigurationError as error:
        logger.exception(
            'Failed to load configuration for shortlink info function. Responding with 500.',
            extra={'event': CONFIGURATION_ERROR, 'error': error.__class__.__name__, 'statusCode': 500},
        )
        return response_500()

    # 3- Read detail record
    try:
        shortlink_dao = ShortlinkRedisDAO(**redis_kwargs, redis_socket_timeout=storage_timeout(context), prefix=app_prefix())
        shortlink = ShortlinkService(shortlink_dao).info(shortcode)
    except ShortlinkNotFoundError:
        logger.info(
            'Shortlink not found or expired. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORTLINK_NOT_FOUND, 'statusCode': 404},
        )
        return response_404(error_code=SHORTLINK_NOT_FOUND)
    except DataStoreError as error:
        logger.exception(
            'Data store failure while reading shortlink detail. Responding with 500.',
            extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR, 'reason': str(error), 'statusCode': 500},
        )
        return response_500(error_code=DATA_STORE_ERROR)

    # 4- Return detail to user
    logger.info(
        'Returning shortlink detail. Responding with 200.',
        extra={'shortcode': shortcode, 'event': INFO_SUCCESS, 'durationMs': duration_ms(started)},
    )
    return response_200(info_body(shortlink, event))
