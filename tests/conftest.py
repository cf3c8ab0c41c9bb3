"""Shared feed payloads for the test suite."""

import pytest

ARXIV_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss xmlns:arxiv="http://arxiv.org/schemas/atom" xmlns:dc="http://purl.org/dc/elements/1.1/" version="2.0">
  <channel>
    <title>cs.AI updates on arXiv.org</title>
    <link>http://rss.arxiv.org/rss/cs.AI</link>
    <description>cs.AI updates on the arXiv.org e-print archive.</description>
    <item>
      <title>Neural Scaling Laws Revisited</title>
      <link>https://arxiv.org/abs/2503.02283</link>
      <description>arXiv:2503.02283v1 Announce Type: new
Abstract: We study how large networks behave as data grows.</description>
      <guid isPermaLink="false">oai:arXiv.org:2503.02283v1</guid>
      <category>cs.AI</category>
      <category>cs.LG</category>
      <pubDate>Wed, 05 Mar 2025 00:00:00 -0500</pubDate>
      <arxiv:announce_type>new</arxiv:announce_type>
      <dc:creator>Alice Smith, Bob Jones</dc:creator>
    </item>
    <item>
      <title>Planning with Symbolic Search</title>
      <link>https://arxiv.org/abs/2503.02300</link>
      <description>arXiv:2503.02300v1 Announce Type: cross
Abstract: A classical planner for robotic tasks.</description>
      <guid isPermaLink="false">oai:arXiv.org:2503.02300v1</guid>
      <category>cs.AI</category>
      <pubDate>Wed, 05 Mar 2025 00:00:00 -0500</pubDate>
      <arxiv:announce_type>cross</arxiv:announce_type>
      <dc:creator>Carol White</dc:creator>
    </item>
  </channel>
</rss>
"""

ARXIV_ATOM = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <id>http://arxiv.org/api/query-id</id>
  <title>arXiv Query</title>
  <updated>2025-03-08T00:00:00-05:00</updated>
  <entry>
    <id>http://arxiv.org/abs/2503.02283v1</id>
    <updated>2025-03-04T18:00:00Z</updated>
    <published>2025-03-04T18:00:00Z</published>
    <title>Neural Scaling Laws Revisited</title>
    <summary>We study how large networks behave as data grows.</summary>
    <author><name>Alice Smith</name></author>
    <author><name>Bob Jones</name></author>
    <link href="http://arxiv.org/abs/2503.02283v1" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2503.02283v1" rel="related" type="application/pdf"/>
    <category term="cs.AI" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

ARXIV_ATOM_EMPTY = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <id>http://arxiv.org/api/query-id</id>
  <title>arXiv Query</title>
  <updated>2025-03-08T00:00:00-05:00</updated>
</feed>
"""

ARXIV_ATOM_ERROR = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <id>http://arxiv.org/api/query-id</id>
  <title>arXiv Query</title>
  <updated>2025-03-08T00:00:00-05:00</updated>
  <entry>
    <id>http://arxiv.org/api/errors#incorrect_id_format_for_nope</id>
    <title>Error</title>
    <summary>incorrect id format for nope</summary>
    <updated>2025-03-08T00:00:00-05:00</updated>
  </entry>
</feed>
"""

BIORXIV_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" xmlns="http://purl.org/rss/1.0/" xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:prism="http://prismstandard.org/namespaces/basic/2.0/">
  <channel rdf:about="http://connect.biorxiv.org">
    <title>bioRxiv Channel: Neuroscience</title>
    <link>http://connect.biorxiv.org</link>
    <description>Neuroscience preprints</description>
  </channel>
  <item rdf:about="http://biorxiv.org/cgi/content/short/2025.03.01.641017v1?rss=1">
    <title><![CDATA[Cortical dynamics of attention]]></title>
    <link>http://biorxiv.org/cgi/content/short/2025.03.01.641017v1?rss=1</link>
    <description><![CDATA[We record neurons in visual cortex during attention tasks.]]></description>
    <dc:creator><![CDATA[Alice Smith, Bob Jones]]></dc:creator>
    <dc:date>2025-03-04</dc:date>
    <dc:identifier>doi:10.1101/2025.03.01.641017</dc:identifier>
    <dc:publisher>Cold Spring Harbor Laboratory</dc:publisher>
  </item>
  <item rdf:about="http://biorxiv.org/cgi/content/short/2025.03.02.641100v1?rss=1">
    <title><![CDATA[Zebrafish fin regeneration]]></title>
    <link>http://biorxiv.org/cgi/content/short/2025.03.02.641100v1?rss=1</link>
    <description><![CDATA[Regrowth of fins after amputation.]]></description>
    <dc:creator><![CDATA[Carol White]]></dc:creator>
    <dc:date>2025-03-04</dc:date>
    <dc:identifier>doi:10.1101/2025.03.02.641100</dc:identifier>
    <dc:publisher>Cold Spring Harbor Laboratory</dc:publisher>
  </item>
</rdf:RDF>
"""

BIORXIV_JSON = {
    "messages": [{"status": "ok", "count": 2, "total": 2}],
    "collection": [
        {
            "doi": "10.1101/2025.03.01.641017",
            "title": "Cortical dynamics of attention",
            "authors": "Smith, A.; Jones, B.",
            "date": "2025-03-04",
            "version": "2",
            "type": "new results",
            "category": "neuroscience",
            "abstract": "We record neurons in visual cortex during attention tasks.",
            "server": "biorxiv",
        },
        {
            "doi": "10.1101/2025.03.02.641100",
            "title": "Zebrafish fin regeneration",
            "authors": "White, C.",
            "date": "2025-03-05",
            "version": "1",
            "type": "new results",
            "category": "developmental biology",
            "abstract": "Regrowth of fins after amputation.",
            "server": "biorxiv",
        },
    ],
}


@pytest.fixture
def arxiv_rss():
    return ARXIV_RSS


@pytest.fixture
def arxiv_atom():
    return ARXIV_ATOM


@pytest.fixture
def arxiv_atom_empty():
    return ARXIV_ATOM_EMPTY


@pytest.fixture
def arxiv_atom_error():
    return ARXIV_ATOM_ERROR


@pytest.fixture
def biorxiv_rss():
    return BIORXIV_RSS


@pytest.fixture
def medrxiv_rss():
    return BIORXIV_RSS.replace("biorxiv", "medrxiv").replace("bioRxiv", "medRxiv")


@pytest.fixture
def biorxiv_json():
    return BIORXIV_JSON
