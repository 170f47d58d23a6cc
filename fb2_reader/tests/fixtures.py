"""Shared sample books and tree builders for the test suite."""
from fb2_reader.model.elements import ParagraphItem, TextRun, TitleItem

PNG_HEADER = b'\x89PNG\r\n\x1a\n'

SAMPLE_FB2 = """
<FictionBook xmlns="http://www.gribuser.ru/xml/fictionbook/2.0" xmlns:l="http://www.w3.org/1999/xlink">
  <description>
    <title-info>
      <genre>sf</genre>
      <author><first-name>Ivan</first-name><last-name>Petrov</last-name></author>
      <book-title>Sample Book</book-title>
      <lang>ru</lang>
    </title-info>
  </description>
  <body>
    <title><p>Sample Book</p><p>A Novel</p></title>
    <section>
      <title><p>Chapter 1</p></title>
      <epigraph><p>Quoted wisdom</p><text-author>Someone</text-author></epigraph>
      <p>Hello, <emphasis>brave</emphasis> world.</p>
      <image l:href="#pic1"/>
      <empty-line/>
      <poem>
        <title><p>Song</p></title>
        <stanza>
          <v>First verse</v>
          <v>Second verse</v>
        </stanza>
        <date value="2001-02-03">3 Feb 2001</date>
      </poem>
      <cite><p>Cited text</p></cite>
    </section>
  </body>
  <body name="notes">
    <section><title><p>1</p></title><p>A note</p></section>
  </body>
  <binary id="pic1" content-type="image/png">iVBORw0KGgo=</binary>
</FictionBook>
"""


def paragraph(text: str) -> ParagraphItem:
    return ParagraphItem(runs=[TextRun(text)])


def title(*texts: str) -> TitleItem:
    return TitleItem(paragraphs=[paragraph(text) for text in texts])


def wrap_book(body_xml: str) -> str:
    return (
        '<FictionBook xmlns="http://www.gribuser.ru/xml/fictionbook/2.0" '
        'xmlns:l="http://www.w3.org/1999/xlink">'
        f"<body>{body_xml}</body></FictionBook>"
    )
