# site_mapper/report/text_report.py

"""
Writing the site map text to a file.
"""
from pathlib import Path


def render_text(site_map: str, output_path: Path | str) -> Path:
    """
    Save *site_map* as UTF-8 text at *output_path*.

    :param site_map: text returned by SiteMapCrawler.crawl
    :param output_path: path of the target file
    :return: absolute Path of the saved file

    Example:
    ```python
    from site_mapper.report.text_report import render_text
    saved = render_text(site_map, 'siteMap.txt')
    print(f"SiteMap saved to: {saved}")
    ```
    """
    output = Path(output_path).expanduser().absolute()
    output.parent.mkdir(parents=True, exist_ok=True)

    # newline="" keeps "\n" separators on every platform
    with output.open('w', encoding='utf-8', newline='') as f:
        f.write(site_map)

    return output
