"""API Gateway (Lambda proxy) response builders

Every body is JSON. Error bodies carry a human readable `message` and,
where it helps the client, an `errorCode`.
"""

import json
from typing import Any

from shortlinker.types import LambdaResponse


JSON_HEADERS = {'Content-Type': 'application/json'}


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 201,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }
