"""
Connection utilities for the hosted table-query service (PostgREST API)
"""

import logging

import requests

logger = logging.getLogger(__name__)

REST_PATH = '/rest/v1'


class QueryError(Exception):
    """Raised when the remote service rejects or fails a query"""

    def __init__(self, message, table=None, status_code=None, code=None):
        super().__init__(message)
        self.message = message
        self.table = table
        self.status_code = status_code
        self.code = code

    def __str__(self):
        parts = [self.message]
        if self.table:
            parts.append(f"table={self.table}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.code:
            parts.append(f"code={self.code}")
        return ' '.join(parts)


class TableQueryClient:
    """Read-only client for a PostgREST endpoint such as Supabase"""

    def __init__(self, base_url, api_key, timeout=None, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': api_key,
            'Authorization': f'Bearer {api_key}',
            'Accept': 'application/json',
        })

    def table_url(self, table):
        return f"{self.base_url}{REST_PATH}/{table}"

    @staticmethod
    def build_params(query):
        """
        Translate a TableQuery into PostgREST query-string parameters

        Args:
            query (TableQuery): query to translate

        Returns:
            list: (name, value) pairs, in a stable order
        """
        params = [('select', query.columns.replace(' ', ''))]
        for column, value in query.filters:
            params.append((column, f'eq.{value}'))
        if query.order_by:
            direction = 'asc' if query.ascending else 'desc'
            params.append(('order', f'{query.order_by}.{direction}'))
        if query.limit is not None:
            params.append(('limit', str(query.limit)))
        if query.offset:
            params.append(('offset', str(query.offset)))
        return params

    def fetch(self, query):
        """
        Execute a read query and return its rows

        Args:
            query (TableQuery): query to execute

        Returns:
            list: rows as dictionaries

        Raises:
            QueryError: on transport failure or a non-2xx response
        """
        url = self.table_url(query.table)
        try:
            response = self.session.get(url, params=self.build_params(query), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {query.table} failed: {e}")
            raise QueryError(str(e), table=query.table) from e

        if not response.ok:
            message, code = _error_details(response)
            logger.error(f"Query on {query.table} returned {response.status_code}: {message}")
            raise QueryError(message, table=query.table, status_code=response.status_code, code=code)

        try:
            rows = response.json()
        except ValueError as e:
            raise QueryError('Response was not valid JSON', table=query.table,
                             status_code=response.status_code) from e

        if rows is None:
            return []
        if not isinstance(rows, list):
            raise QueryError('Expected a list of rows', table=query.table,
                             status_code=response.status_code)
        logger.debug(f"Fetched {len(rows)} row(s) from {query.table}")
        return rows

    def close(self):
        self.session.close()


def _error_details(response):
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or 'Query failed', None
    if isinstance(body, dict):
        return body.get('message') or response.reason or 'Query failed', body.get('code')
    return response.reason or 'Query failed', None


def get_table_client(settings):
    """Create a TableQueryClient from Settings"""
    return TableQueryClient(
        settings.supabase_url,
        settings.supabase_key,
        timeout=settings.request_timeout,
    )
