from flask import jsonify

__all__ = ['HTTPResponse', 'HTTPError']


class HTTPBaseResponse(tuple):

    def __new__(cls, resp, status_code=200):
        return super().__new__(tuple, (resp, status_code))


class HTTPResponse(HTTPBaseResponse):

    def __new__(
        cls,
        message='',
        status_code=200,
        status='ok',
        data=None,
    ):
        resp = jsonify({
            'status': status,
            'message': message,
            'data': data,
        })
        return super().__new__(HTTPBaseResponse, resp, status_code)


class HTTPError(HTTPResponse):

    def __new__(cls, message, status_code, data=None):
        return super().__new__(
            HTTPResponse,
            message,
            status_code,
            'err',
            data,
        )
