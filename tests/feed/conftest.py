# ABOUTME: Homepage HTML fixtures shaped like the wiki's main-page template
# ABOUTME: Sections can be dropped individually to exercise section independence

import pytest

RECENT_UPDATES = """
<div class="mainpage-recent-updates">
  <h2>Recent updates</h2>
  <div class="tile-halves">
    <div class="tile-top"><a href="/w/Update:Varlamore"><img src="/images/Varlamore_update.png?1a2b3"></a></div>
    <div class="tile-bottom">
      <a href="/w/Update:Varlamore"><h2>Varlamore: Part Two</h2></a>
      <p>15 October 2026</p>
      <p>Explore the new &amp; improved <b>Varlamore</b> region.</p>
    </div>
  </div>
  <div class="tile-halves">
    <div class="tile-top"><img src="//oldschool.runescape.wiki/images/Poll.png"></div>
    <div class="tile-bottom">
      <a href="https://oldschool.runescape.wiki/w/Update:Poll_82"><h2>Poll 82</h2></a>
      <p>The latest poll results.</p>
    </div>
  </div>
  <div class="tile-halves">
    <div class="tile-top"><img src="/images/Placeholder.png"></div>
    <div class="tile-bottom">
      <a href="/w/Update:Unknown"><h2>Recent Update</h2></a>
      <p>Placeholder tile.</p>
    </div>
  </div>
  <div class="tile-halves">
    <div class="tile-top"><img src="/images/Game_jam.png"></div>
    <div class="tile-bottom">
      <a href="/w/Update:Game_Jam"><h2>Game Jam</h2></a>
    </div>
  </div>
</div>
<div class="mainpage-contents">Contents</div>
"""

ANNOUNCEMENTS = """
<div class="mainpage-wikinews">
  <h2>Wiki news</h2>
  <dl>
    <dt>14 October 2026</dt>
    <dd>The wiki has a new <a href="/w/RuneScape:Map">interactive map</a>.</dd>
    <dt>1 October 2026</dt>
    <dd>Editing contest winners announced!</dd>
  </dl>
</div>
"""

ON_THIS_DAY = """
<div class="mainpage-onthisday">
  <h2>On this day...</h2>
  <ul>
    <li>2013 - <a href="/w/Old_School_RuneScape">Old School RuneScape</a> was opened to members.</li>
    <li>2015 - The <a href="/w/Grand_Exchange">Grand Exchange</a> was released.</li>
  </ul>
</div>
"""

POPULAR_PAGES = """
<div class="mainpage-popular">
  <ul>
    <li><a href="/w/Grand_Exchange" title="Grand Exchange">Grand Exchange</a></li>
    <li><a href="/w/Money_making_guide" title="Money making guide">Money making guide</a></li>
    <li><a href="/w/Quests" title="Quests">Quests &amp; achievements</a></li>
  </ul>
</div>
"""

SECTIONS = {
    "recent_updates": RECENT_UPDATES,
    "announcements": ANNOUNCEMENTS,
    "on_this_day": ON_THIS_DAY,
    "popular_pages": POPULAR_PAGES,
}


def render_homepage(*omit: str) -> str:
    body = "".join(html for name, html in SECTIONS.items() if name not in omit)
    return f"<!DOCTYPE html><html><head><title>Old School RuneScape Wiki</title></head><body>{body}</body></html>"


@pytest.fixture
def homepage_html() -> str:
    return render_homepage()


@pytest.fixture
def homepage_factory():
    """Render the homepage with the named sections left out."""
    return render_homepage
