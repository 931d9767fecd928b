# SPDX-License-Identifier: Apache-2.0
"""Static content for the local fallback summary.

All text is keyed by bucket. Slot templates take a single ``{value}``;
opening templates name the slots they consume.
"""

from __future__ import annotations

from year_review.core.classification import Bucket

# Card used when a bucket has no usable answers: (title, content)
GENERIC_CARDS: dict[Bucket, tuple[str, str]] = {
    Bucket.JOURNEY: (
        "时光邮戳",
        "这一年的车票你已集齐，每一站的风雨都化作了此刻的云淡风轻。"
        "你也许没有走得很远，却在熟悉的街道上发现了新的风景。"
        "那些按时出门又按时回家的日子，同样是一段认真的旅程。",
    ),
    Bucket.EMOTIONS: (
        "且听风吟",
        "那些深夜的辗转反侧，终将成为你盔甲上最坚硬的鳞片。"
        "这一年你有过欢喜，也有过说不出口的委屈，"
        "可你始终没有放弃对自己温柔。"
        "哭过的眼睛会更明亮，被风吹乱的心也会慢慢回到原处。",
    ),
    Bucket.TASTES: (
        "瞬息宇宙",
        "在书页与旋律的缝隙里，你找到了那个不被世俗打扰的自己。"
        "一杯热饮、一首老歌、一部看了又看的电影，"
        "这些微小的喜好悄悄撑起了许多平凡的日子。",
    ),
    Bucket.FUTURE: (
        "未完待续",
        "故事的下一章，笔依然在你手中。"
        "这一年留下的问题不必急着回答，它们会在时间里慢慢长出答案。"
        "你已经学会了在不确定里前行，也学会了为自己留一盏灯。"
        "下一个路口，会有新的风景在等你。",
    ),
}

# Title pools: (slot that narrows the pool, titles); the last entry is the
# default pool and has no slot.
TITLE_POOLS: dict[Bucket, tuple[tuple[str | None, tuple[str, ...]], ...]] = {
    Bucket.JOURNEY: (
        ("destination", ("步履不停", "山海之间")),
        ("achievement", ("星光勋章", "破茧成蝶")),
        (None, ("时光邮戳", "一路向前", "远方来信", "行者无疆")),
    ),
    Bucket.EMOTIONS: (
        ("love", ("心动时刻", "怦然心动")),
        ("failure", ("雨后初晴", "且听风吟")),
        ("difficulty", ("雨后初晴", "逆风而行")),
        (None, ("心海微澜", "悲欣交集", "且听风吟", "温柔以待")),
    ),
    Bucket.TASTES: (
        ("song", ("耳畔旋律", "循环播放")),
        ("new_song", ("耳畔旋律", "循环播放")),
        ("book", ("书影人间", "瞬息宇宙")),
        ("movie", ("书影人间", "光影流年")),
        ("meal", ("人间烟火", "舌尖记忆")),
        (None, ("瞬息宇宙", "私人收藏", "小小确幸", "人间烟火")),
    ),
    Bucket.FUTURE: (
        ("wish", ("未来来信", "向光而行")),
        ("lesson", ("岁月赠言", "生长痛觉")),
        (None, ("未完待续", "向光而行", "明日可期", "山高水长")),
    ),
}

# Opening sentences, most specific first: (slots consumed, template)
OPENINGS: dict[Bucket, tuple[tuple[tuple[str, ...], str], ...]] = {
    Bucket.JOURNEY: (
        (
            ("destination", "achievement"),
            "这一年，你的脚步抵达了「{destination}」，也亲手完成了「{achievement}」。",
        ),
        (("destination",), "这一年，你的车票上印着「{destination}」，每一段路都算数。"),
        (("achievement",), "这一年最值得被记住的，是你完成了「{achievement}」。"),
        (("first_time",), "这一年，你第一次尝试了「{first_time}」，原来勇气也可以很日常。"),
        ((), "这一年，你没有停下脚步，在日常的缝隙里悄悄走了很远。"),
    ),
    Bucket.EMOTIONS: (
        (
            ("failure", "difficulty"),
            "这一年，你经历过「{failure}」，也扛住了「{difficulty}」。",
        ),
        (("love",), "这一年，关于爱，你写下的是「{love}」。"),
        (("failure",), "这一年，你也有过「{failure}」这样的失落。"),
        (("difficulty",), "这一年并不总是轻松，「{difficulty}」曾让你辗转反侧。"),
        (("missing",), "这一年，你常常想起「{missing}」。"),
        ((), "这一年，你的心里有过晴天，也下过几场安静的雨。"),
    ),
    Bucket.TASTES: (
        (("book", "movie"), "这一年，你在《{book}》里停留，也在《{movie}》的光影里出神。"),
        (("song",), "这一年的背景音乐是《{song}》，一响起就能回到那些日子。"),
        (("book",), "这一年，你把许多安静的时间交给了《{book}》。"),
        (("meal",), "这一年最难忘的味道，是「{meal}」。"),
        ((), "这一年，你在书页与旋律的缝隙里，找到了那个不被打扰的自己。"),
    ),
    Bucket.FUTURE: (
        (("wish", "lesson"), "明年，你想要「{wish}」；而这一年教会你的，是「{lesson}」。"),
        (("wish",), "明年，你想要拥有「{wish}」。"),
        (("lesson",), "这一年教会你的，是「{lesson}」。"),
        (("motto",), "如果用一句话总结这一年，你会说「{motto}」。"),
        ((), "故事的下一章，笔依然在你手中。"),
    ),
}

# Follow-up sentence per slot, in the order they are tried
SLOT_SENTENCES: dict[Bucket, tuple[tuple[str, str], ...]] = {
    Bucket.JOURNEY: (
        ("first_time", "你第一次尝试了「{value}」，原来勇气也可以很日常。"),
        ("destination", "地图上新点亮的名字是「{value}」，每一站都盖上了小小的邮戳。"),
        ("memorable_day", "有一天被你折进了记忆的书页：「{value}」。"),
        ("achievement", "你亲手完成了「{value}」，那是写给自己的一枚勋章。"),
        ("excitement", "让你心跳加速的，是「{value}」。"),
        ("promise", "年初许下的约定，你交出的答卷是「{value}」。"),
        ("holiday", "节假日里，你选择了「{value}」。"),
        ("birthday", "生日那天，你留下的记忆是「{value}」。"),
    ),
    Bucket.EMOTIONS: (
        ("love", "说到心动，你的答案是「{value}」。"),
        ("failure", "你不回避「{value}」，失败也成了你的一部分。"),
        ("difficulty", "「{value}」曾让你辗转反侧，可你终究走了过来。"),
        ("missing", "你想念「{value}」，思念是爱换了一种说法。"),
        ("farewell", "有人离开了：「{value}」，你学着把告别放在心里。"),
        ("new_life", "也有新的生命到来：「{value}」。"),
        ("health", "身体也提醒过你：「{value}」，照顾好自己从来不是小事。"),
        ("change", "和去年相比，你说自己「{value}」。"),
        ("anchor", "让你保持理智的，是「{value}」。"),
        ("new_friend", "新认识的人里，「{value}」让你格外珍惜。"),
        ("praise", "你记得「{value}」的善意，并愿意为之鼓掌。"),
        ("shock", "「{value}」让你震惊，也让你重新理解了人。"),
        ("estrangement", "关于那些渐行渐远的人，你写下「{value}」。"),
    ),
    Bucket.TASTES: (
        ("song", "《{value}》会永远让你想起这一年。"),
        ("new_song", "新发现的《{value}》，在耳机里循环了很多遍。"),
        ("book", "你在《{value}》里读到了另一个自己。"),
        ("movie", "《{value}》的某个镜头，让你在黑暗里安静了很久。"),
        ("show", "追完的《{value}》，陪你度过了许多平常的夜晚。"),
        ("meal", "最好吃的一顿是「{value}」，幸福原来有具体的味道。"),
        ("purchase", "今年最值得的一笔，是「{value}」。"),
        ("spending", "钱大多花在了「{value}」上，那也是你在意的东西。"),
        ("style", "你的风格是「{value}」，舒服比好看更重要。"),
        ("idol", "你欣赏「{value}」，也悄悄向那样的人靠近。"),
    ),
    Bucket.FUTURE: (
        ("wish", "你期待着「{value}」，那是写给明年的第一行字。"),
        ("lesson", "你学到了「{value}」，它会陪你走很远。"),
        ("motto", "你用一句话总结这一年：「{value}」。"),
        ("fulfilment", "如果「{value}」能够发生，这一年就圆满了。"),
        ("gained", "想要并且得到了的，是「{value}」。"),
        ("missed", "还没得到的「{value}」，就留给明年去追。"),
        ("do_more", "你希望自己能多一些「{value}」。"),
        ("do_less", "也想少一点「{value}」，给生活留出空白。"),
        ("cause", "让你有感而发的，是「{value}」。"),
    ),
}

# Closing sentences appended while content is below the minimum length
CLOSINGS: dict[Bucket, tuple[str, ...]] = {
    Bucket.JOURNEY: (
        "每一张旧车票，都是你认真生活过的证明。",
        "路还长，但你已经知道自己为什么出发。",
        "那些走过的路，会在某个清晨突然变得很温柔。",
        "你把风景装进口袋，也把自己留在了路上。",
        "下一段旅程开始之前，先为这一年的自己鼓鼓掌。",
        "远方不只在地图上，也在你每一次出发的念头里。",
    ),
    Bucket.EMOTIONS: (
        "你允许自己难过，也允许自己慢慢好起来。",
        "情绪来来去去，而你一直是自己最温柔的港湾。",
        "那些说不出口的心事，也在时间里慢慢有了答案。",
        "被爱过的痕迹不会消失，它们成了你发光的部分。",
        "你比自己以为的更勇敢，也更柔软。",
        "愿你以后的每一次哭泣，都有人轻轻拍拍你的肩。",
    ),
    Bucket.TASTES: (
        "这些小小的喜好，拼成了独一无二的你。",
        "热爱是很私人的事，而你一直认真地热爱着。",
        "生活的滋味，藏在每一次认真挑选里。",
        "有些旋律和味道，会替你记住这一年。",
        "你收藏的每一份美好，都在悄悄滋养着你。",
        "平凡的日子，因为这些偏爱而闪闪发亮。",
    ),
    Bucket.FUTURE: (
        "愿你依然热泪盈眶，依然相信远方。",
        "未来不必急着抵达，你已经在路上。",
        "下一站会更好，因为你已经准备好了。",
        "把这一年的答案折好，放进明年的口袋里。",
        "你不必成为别人，只要成为更自在的自己。",
        "新的一年，愿你所求皆如愿，所行皆坦途。",
    ),
}

GENERIC_TAGS: tuple[str, ...] = ("star", "heart", "camera", "coffee", "book")

POEM_TEMPLATE = "{token}是这一年的注脚，\n风把日子吹成了诗行。\n你在来路拾起星光，\n也在归途点亮灯火。"

GENERIC_POEM_TOKEN = "时光"

ANALYSIS_INTRO = "这一年，你的故事可以分成四个章节。"

ANALYSIS_OUTRO = "愿你带着这些答案，平静而坚定地走进新的一年。"

GENERIC_KEYWORD = "LIFE"

FALLBACK_ANIMAL = "Deer"

# Sentence for an answered question that fills no named slot
UNSLOTTED_SENTENCE = "关于「{category}」，你写下了「{value}」。"
