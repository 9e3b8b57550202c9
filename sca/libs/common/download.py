from __future__ import annotations

import os

import requests

# Seconds, per request
DOWNLOAD_TIMEOUT = 60


def download(url: str, path: str, timeout: float | None = DOWNLOAD_TIMEOUT) -> str:
    """
    Download the content at url and write it verbatim to path.
    Parent directories are created as needed and an existing file is overwritten.
    Any network error or non-2xx answer is raised to the caller.
    """
    if os.path.isdir(path):
        path = os.path.join(path, os.path.basename(url))

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    print(f"Downloading {url} to {path}")
    response = requests.get(url, stream=True, timeout=timeout)
    response.raise_for_status()

    with open(path, "wb") as writer:
        name = os.path.basename(path)
        total = int(response.headers.get('content-length', 0)) or None

        import rich.progress

        with rich.progress.Progress(
            rich.progress.SpinnerColumn(),
            rich.progress.TextColumn("[progress.description]{task.description}"),
            rich.progress.BarColumn(),
            rich.progress.DownloadColumn(),
            rich.progress.TransferSpeedColumn(),
        ) as progress:
            task = progress.add_task(f"Downloading {name}", total=total)
            for chunk in response.iter_content(chunk_size=4096):
                writer.write(chunk)
                progress.update(task, advance=len(chunk))

    return path
