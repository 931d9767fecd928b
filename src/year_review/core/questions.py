# SPDX-License-Identifier: Apache-2.0
"""The fixed 40-question year-in-review catalogue."""

from __future__ import annotations

from .models import Question

MAX_QUESTION_ID = 40

QUESTIONS: tuple[Question, ...] = (
    # Part 1
    Question(1, 1, "你今年做了哪些之前从未做过的事？", "探索"),
    Question(2, 1, "你坚持年初时和自己许下的约定了吗？", "承诺"),
    Question(3, 1, "你身边有人生孩子了吗？", "生命"),
    Question(4, 1, "你身边有人去世了吗？", "离别"),
    Question(5, 1, "你去了哪些城市/州/国家？", "足迹"),
    Question(6, 1, "明年你想要拥有哪些今年没有的东西？", "愿望"),
    Question(7, 1, "今年的哪个或哪些日子会铭刻在你的记忆中，为什么？", "时刻"),
    Question(8, 1, "你今年最大的成就是什么？", "成就"),
    Question(9, 1, "你今年最大的失败是什么？", "挫折"),
    Question(10, 1, "你今年还遇到过哪些困难？", "挑战"),
    # Part 2
    Question(11, 2, "你今年是否生过病或受过伤？", "健康"),
    Question(12, 2, "你今年买过的最好的东西是什么？", "物质"),
    Question(13, 2, "谁的行为值得去表扬？", "他人"),
    Question(14, 2, "谁的行为令你感到震惊？", "触动"),
    Question(15, 2, "你大部分的钱都花到哪里去了？", "财务"),
    Question(16, 2, "有什么事让你感到超级、超级、超级兴奋？", "激情"),
    Question(17, 2, "哪首歌会永远让你想起这一年？", "旋律"),
    Question(
        18,
        2,
        "与去年的这个时候相比，你是：感到更快乐还是更悲伤了？"
        "变得更瘦还是更胖了？变得更富还是更穷了？",
        "变化",
    ),
    Question(19, 2, "你希望自己能做得更多的是什么？", "遗憾"),
    Question(20, 2, "你希望自己能做得更少的是什么？", "减法"),
    # Part 3
    Question(21, 3, "你是如何度过节假日的？", "闲暇"),
    Question(22, 3, "你今年坠入爱河了吗？", "情感"),
    Question(23, 3, "你是否有讨厌某个你去年此时不觉得讨厌的人呢？", "人际"),
    Question(24, 3, "你最喜欢的电视节目是什么？", "娱乐"),
    Question(25, 3, "你读过最好的一本书是什么？", "阅读"),
    Question(26, 3, "你今年发现的最好听的一首歌是什么？", "发现"),
    Question(27, 3, "你今年看过最喜欢的一部电影是什么？", "光影"),
    Question(28, 3, "你今年吃过最好吃的一顿饭是什么？", "味蕾"),
    Question(29, 3, "有什么是你想要且得到了的？", "收获"),
    Question(30, 3, "有什么是你想要却没有得到的？", "未得"),
    # Part 4
    Question(31, 4, "你生日那天做了什么？", "仪式"),
    Question(32, 4, "还有什么未发生的事，如果发生了，会让你这一年变得无比满足？", "期待"),
    Question(33, 4, "你会如何描述你今年的个人时尚风格？", "风格"),
    Question(34, 4, "是什么让你保持理智？", "支撑"),
    Question(35, 4, "你最欣赏哪个名人/公众人物？", "偶像"),
    Question(36, 4, "哪个政治问题最令你有感而发？", "观点"),
    Question(37, 4, "你想念哪些人？", "思念"),
    Question(38, 4, "在你新认识的人之中，谁是最好的？", "相遇"),
    Question(39, 4, "今年你学到了什么宝贵的人生经验？", "成长"),
    Question(40, 4, "能够总结你这一年的一句话是什么？", "总结"),
)

_BY_ID: dict[int, Question] = {q.id: q for q in QUESTIONS}


def get_question(question_id: int) -> Question:
    """Look up a catalogue question by id.

    Raises:
        KeyError: If the id is not in the catalogue.
    """
    return _BY_ID[question_id]


def questions_in_part(part: int) -> list[Question]:
    """Return the questions of one part (1-4) in catalogue order."""
    return [q for q in QUESTIONS if q.part == part]


def is_valid_question_id(question_id: int) -> bool:
    """Check whether an id falls in the catalogue range."""
    return 1 <= question_id <= MAX_QUESTION_ID
