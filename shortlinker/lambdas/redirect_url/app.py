import re
import time
import logging

from shortlinker.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinker.service import ShortlinkService
from shortlinker.dao.redis import ShortlinkRedisDAO
from shortlinker.dao.exceptions import ShortlinkNotFoundError, DataStoreError
from shortlinker.exceptions import ConfigurationError
from shortlinker.constants import Shortcode, CONFIGURATION_ERROR, DATA_STORE_ERROR, INVALID_SHORTCODE, SHORTLINK_NOT_FOUND
from shortlinker.utils import load_config, redis_config, app_prefix, storage_timeout, duration_ms, guarantee_500_response
from shortlinker.utils.responses import response_307, response_404, response_500
from shortlinker.lambdas.redirect_url.constants import REDIRECT_SUCCESS


logger = logging.getLogger(__name__)

SHORTCODE_RE = re.compile(Shortcode.PATTERN)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect to original URLs (GET /{shortcode})

    This Lambda handler follows this procedure to redirect users:
    - Step 1: Extract and validate the shortcode from the path
    - Step 2: Load the application's config
    - Step 3: Resolve the shortcode to its original URL
    - Step 4: Respond with 307 temporary redirect

    HTTP responses:
        307: Redirect to original URL
            headers: Location = original URL
        404: Shortcode malformed, unknown or expired
        500: Internal server error
    """
    started = time.perf_counter()

    # 1- Extract shortcode from path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not isinstance(shortcode, str) or not SHORTCODE_RE.fullmatch(shortcode):
        logger.info(
            'Invalid shortcode in path. Responding with 404.',
            extra={'shortcode': shortcode, 'event': INVALID_SHORTCODE, 'statusCode': 404},
        )
        return response_404(error_code=INVALID_SHORTCODE)

    # 2- Get application's config
    try:
        app_config = load_config('redirect_url')
        redis_kwargs = redis_config(app_config)
    except ConfigurationError as error:
        logger.exception(
            'Failed to load configuration for redirect URL function. Responding with 500.',
            extra={'event': CONFIGURATION_ERROR, 'error': error.__class__.__name__, 'statusCode': 500},
        )
        return response_500()

    # 3- Resolve shortcode
    try:
        shortlink_dao = ShortlinkRedisDAO(**redis_kwargs, redis_socket_timeout=storage_timeout(context), prefix=app_prefix())
        original_url = ShortlinkService(shortlink_dao).unshorten(shortcode)
    except ShortlinkNotFoundError:
        logger.info(
            'Shortlink not found or expired. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORTLINK_NOT_FOUND, 'statusCode': 404},
        )
        return response_404(error_code=SHORTLINK_NOT_FOUND)
    except DataStoreError as error:
        logger.exception(
            'Data store failure while resolving shortcode. Responding with 500.',
            extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR, 'reason': str(error), 'statusCode': 500},
        )
        return response_500(error_code=DATA_STORE_ERROR)

    # 4- Redirect user
    logger.info(
        'Redirecting client to target URL. Responding with 307.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS, 'durationMs': duration_ms(started)},
    )
    return response_307(location=original_url)
