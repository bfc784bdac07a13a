"""Tests for the rule-based description section parser."""

from recipe_bookmarks.services.description_parser import (
    ParsedDescription,
    SectionType,
    find_section_markers,
    parse_description,
)


class TestHeaderSections:
    """Stage 1: header-based parsing."""

    def test_japanese_headers(self):
        text = "材料\n卵 2個\n牛乳 200ml\n作り方\n混ぜる"

        result = parse_description(text)

        assert result.ingredients == "卵 2個\n牛乳 200ml"
        assert result.instructions == "混ぜる"
        assert result.remaining_text is None

    def test_english_headers_with_colons(self):
        text = "Ingredients:\n2 eggs\n1 cup milk\n\nInstructions:\nWhisk and cook."

        result = parse_description(text)

        assert result.ingredients == "2 eggs\n1 cup milk"
        assert result.instructions == "Whisk and cook."

    def test_decorated_headers(self):
        text = "\n".join([
            "今日は簡単な親子丼です！",
            "",
            "【材料】（2人分）",
            "・鶏もも肉 200g",
            "・玉ねぎ 1/2個",
            "",
            "■作り方",
            "1. 玉ねぎを切る",
            "2. 鶏肉を煮る",
        ])

        result = parse_description(text)

        assert result.ingredients == "・鶏もも肉 200g\n・玉ねぎ 1/2個"
        assert result.instructions == "1. 玉ねぎを切る\n2. 鶏肉を煮る"
        assert result.remaining_text == "今日は簡単な親子丼です！"

    def test_servings_without_brackets(self):
        result = parse_description("★材料 2人分\n豆腐 1丁\n★手順\n切る")

        assert result.ingredients == "豆腐 1丁"
        assert result.instructions == "切る"

    def test_sns_block_ends_recipe(self):
        text = "\n".join([
            "材料",
            "米 2合",
            "作り方",
            "炊く",
            "",
            "▼SNS",
            "Instagram: @kitchen",
            "チャンネル登録よろしくお願いします",
        ])

        result = parse_description(text)

        assert result.instructions == "炊く"

    def test_long_rule_ends_recipe(self):
        text = "Ingredients\nrice\nMethod\nboil\n━━━━━━━━━━\nMusic by someone"

        result = parse_description(text)

        assert result.ingredients == "rice"
        assert result.instructions == "boil"

    def test_hashtag_line_ends_recipe(self):
        result = parse_description("材料\n塩\n作り方\n振る\n#料理 #簡単レシピ")

        assert result.instructions == "振る"

    def test_numbered_step_is_not_a_hashtag(self):
        text = "材料\n卵\n作り方\n#1\n割る\n#2\n焼く\n#料理 #簡単レシピ"

        result = parse_description(text)

        assert result.instructions == "#1\n割る\n#2\n焼く"

    def test_end_marker_before_any_section_is_ignored(self):
        text = "Follow me on Instagram\n━━━━━━━━━━\n材料\n塩\n作り方\n焼く"

        result = parse_description(text)

        assert result.ingredients == "塩"
        assert result.instructions == "焼く"
        assert result.remaining_text == "Follow me on Instagram\n━━━━━━━━━━"

    def test_only_ingredients_section(self):
        result = parse_description("Ingredients\nflour\nwater")

        assert result.ingredients == "flour\nwater"
        assert result.instructions is None

    def test_empty_section_absent(self):
        result = parse_description("材料\n\n作り方\n混ぜる")

        assert result.ingredients is None
        assert result.instructions == "混ぜる"

    def test_repeated_sections_are_concatenated(self):
        text = "材料\n卵\n作り方\n割る\n材料\n砂糖\n作り方\n混ぜる"

        result = parse_description(text)

        assert result.ingredients == "卵\n砂糖"
        assert result.instructions == "割る\n混ぜる"

    def test_prose_mentioning_header_word_is_not_a_header(self):
        result = parse_description("材料を全部混ぜるだけ！\n簡単です")

        assert result == ParsedDescription()

    def test_markers_are_ascending(self):
        lines = ["intro", "材料", "卵", "作り方", "焼く", "━━━━━━━━━━", "材料"]

        markers = find_section_markers(lines)

        assert [(m.type, m.line_index) for m in markers] == [
            (SectionType.INGREDIENTS, 1),
            (SectionType.INSTRUCTIONS, 3),
            (SectionType.END, 5),
        ]


class TestSeparatorFallback:
    """Stage 2: recipe marker plus dashed rules."""

    def test_recipe_between_rules(self):
        text = "\n".join([
            "今日は焼き魚！",
            "★今回のレシピはこちら↓",
            "----------",
            "塩",
            "胡椒",
            "",
            "焼く",
            "----------",
            "ご視聴ありがとうございました",
        ])

        result = parse_description(text)

        assert result.ingredients == "塩\n胡椒"
        assert result.instructions == "焼く"
        assert result.remaining_text == "今日は焼き魚！"

    def test_multiple_step_groups_are_joined(self):
        text = "レシピはこちら\n————\nA\nB\n\n1. mix\n\n2. bake\n————"

        result = parse_description(text)

        assert result.ingredients == "A\nB"
        assert result.instructions == "1. mix\n2. bake"

    def test_single_group_has_no_instructions(self):
        result = parse_description("今回のレシピはこちら\n----\n塩\n----")

        assert result.ingredients == "塩"
        assert result.instructions is None

    def test_needs_two_rules(self):
        result = parse_description("今回のレシピはこちら\n----------\n塩\n胡椒")

        assert result == ParsedDescription()

    def test_rules_before_marker_do_not_count(self):
        text = "----------\n塩\n----------\n今回のレシピはこちら\n塩"

        assert parse_description(text) == ParsedDescription()

    def test_no_marker(self):
        assert parse_description("----------\n塩\n----------") == ParsedDescription()

    def test_headers_win_over_separators(self):
        text = "今回のレシピはこちら\n----------\nX\n\nY\n----------\n材料\n卵\n作り方\n焼く"

        result = parse_description(text)

        assert result.ingredients == "卵"
        assert result.instructions == "焼く"


class TestEmptyInput:

    def test_none_and_empty(self):
        assert parse_description(None) == ParsedDescription()
        assert parse_description("") == ParsedDescription()

    def test_plain_text(self):
        assert parse_description("Just a vlog today.\nThanks for watching!") == ParsedDescription()
