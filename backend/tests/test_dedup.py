from disruption_tracker.utils.content_hash import generate_item_id, slugify
from disruption_tracker.utils.dedup import title_key, deduplicate, rank_items


class TestTitleKey:

    def test_normalizes_case_and_punctuation(self):
        assert title_key("OpenAI's GPT-5: Released!") == "openaisgpt5released"

    def test_truncates_to_sixty(self):
        assert len(title_key("a" * 100)) == 60

    def test_different_phrasing_gives_different_keys(self):
        assert title_key("Anthropic raises $50M") != title_key("Anthropic raises $50M Series B")


class TestDeduplicate:

    def test_keeps_first_occurrence(self, make_item):
        first = make_item('rd_1', title="OpenAI launches GPT-5")
        duplicate = make_item('rss_2', title="OpenAI launches GPT 5!")
        other = make_item('hn_3', title="Anthropic ships Claude")

        result = deduplicate([first, duplicate, other])

        assert [item.id for item in result] == ['rd_1', 'hn_3']

    def test_idempotent(self, make_item):
        items = [make_item(f'rd_{i}', title=f"OpenAI story {i % 3}") for i in range(6)]
        once = deduplicate(items)
        assert deduplicate(once) == once


class TestRanking:

    def test_stable_for_ties(self, make_item):
        items = [
            make_item('a', title="AI a", engagement_score=5),
            make_item('b', title="AI b", engagement_score=20),
            make_item('c', title="AI c", engagement_score=3),
            make_item('d', title="AI d", engagement_score=20),
        ]
        assert [item.id for item in rank_items(items)] == ['b', 'd', 'a', 'c']

    def test_limit(self, make_item):
        items = [make_item(f'i{n}', title=f"AI {n}", engagement_score=n) for n in range(10)]
        ranked = rank_items(items, limit=3)
        assert [item.engagement_score for item in ranked] == [9, 8, 7]


class TestItemIds:

    def test_native_id(self):
        assert generate_item_id('rd', 'abc123') == 'rd_abc123'
        assert generate_item_id('hn', 42) == 'hn_42'

    def test_url_hash_is_stable(self):
        first = generate_item_id('rss', url='https://example.com/story')
        second = generate_item_id('rss', url='https://example.com/story')
        assert first == second
        assert first.startswith('rss_')
        assert len(first) == len('rss_') + 20

    def test_slugify(self):
        assert slugify("Anysphere (Cursor)") == "anysphere-cursor"
        assert slugify("$1.5B") == "1-5b"
