"""在浏览器中打开 URL（外部进程，发出后不等待）。"""
import logging
import webbrowser

logger = logging.getLogger("svurl.opener")


def open_externally(url: str) -> bool:
    """调用系统浏览器打开 `url`；找不到可用浏览器时抛出 `webbrowser.Error`。"""
    logger.debug(f"打开 {url}")
    if not webbrowser.open(url):
        raise webbrowser.Error(f"no browser could open {url}")
    return True
