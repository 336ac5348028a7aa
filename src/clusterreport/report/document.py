"""
Small helpers for building the HTML reports. Every function returns markup; text content
must be passed through :func:`text` before it is placed in an element
"""
from html import escape
from typing import Iterable, Optional

NBSP = '&nbsp;'

STYLES = """td.num, th.num { text-align: right; }
td.flag, th.flag { text-align: center; }
td.text, th.text { text-align: left; }
td.big, th.big { width: 20% }
td, th { border-style: groove; padding: 2px; vertical-align: top; min-width: 10px; }
table { border-collapse: collapse; width: 95vw; font-size: small }
body { font-family: Verdana, Arial, Helvetica, sans-serif; font-size: small; }
h1, h2, h3 { font-family: Georgia, "Times New Roman", Times, serif; }"""


def text(value) -> str:
    return escape(str(value))


def element(tag: str, *children: str, **attrs) -> str:
    """
    Args:
        tag: the element name
        children: markup for the element content
        attrs: attributes of the element, a trailing underscore is stripped (class_ -> class)

    Example:
        >>> element('td', text('a<b'), class_='text')
        '<td class="text">a&lt;b</td>'
    """
    attr_markup = ''.join(
        f' {name.rstrip("_")}="{escape(str(value), quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )
    return f'<{tag}{attr_markup}>{"".join(children)}</{tag}>'


def link(label, href: str, new_tab: bool = True) -> str:
    return element('a', text(label), href=href, target='_blank' if new_tab else None)


def anchor(label, name: str) -> str:
    return element('a', text(label), name=name)


def bullet_list(items: Iterable[str]) -> str:
    """
    Args:
        items: markup for each list item
    """
    return element('ul', *[element('li', item) for item in items])


def cell(content: Optional[str] = None, *classes: str) -> str:
    """
    a table cell holding markup, or a blank cell if there is no content
    """
    return element('td', content if content else NBSP, class_=' '.join(classes or ('text',)))


def text_row(values: Iterable, big_columns: int = 0) -> str:
    """
    a table row of plain text cells. The last big_columns cells are marked as wide
    """
    values = list(values)
    cells = []
    for i, value in enumerate(values):
        big = i >= len(values) - big_columns
        cells.append(cell(text(value), 'text', 'big') if big else cell(text(value)))
    return element('tr', *cells)


def header_row(columns: Iterable[str]) -> str:
    return element('tr', *[element('th', text(c), class_='text') for c in columns])


def page(title: str, body: Iterable[str]) -> str:
    return '<!DOCTYPE html>\n' + element(
        'html',
        element('head', element('title', text(title)), element('style', STYLES)),
        element('body', *body),
    )
