import logging

import requests

from errors import FetchError

DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 8192


def fetch(url, destination, timeout=DEFAULT_TIMEOUT, chunk_size=CHUNK_SIZE):
    """Stream ``url`` into ``destination`` without holding the body in memory.

    Raises FetchError on a transport failure, a non-2xx response or a write
    failure. There is no retry.
    """
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(destination, 'wb') as fh:
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        fh.write(chunk)
    except requests.RequestException as e:
        raise FetchError(url, e) from e
    except OSError as e:
        raise FetchError(url, f"could not write {destination}: {e}") from e

    logging.info(f"Downloaded image from {url} to {destination}")
