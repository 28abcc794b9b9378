"""
Sample Data Service - starter content for an empty question bank
"""

import logging
from typing import Dict, List

from models.category import Category, Difficulty
from services.question_repository_service import QuestionRepositoryService

logger = logging.getLogger(__name__)

SAMPLE_QUESTIONS: List[Dict] = [
    {
        "question_text": "ถ้า 2x + 5 = 17 แล้วค่าของ x คือเท่าใด?",
        "options": ["5", "6", "7", "8"],
        "correct_answer_index": 1,
        "explanation": "แก้สมการ: 2x = 17 - 5 = 12 → x = 12/2 = 6",
        "category": Category.GENERAL_APTITUDE.value,
        "difficulty": Difficulty.MEDIUM.value,
    },
    {
        "question_text": "ผลลัพธ์ของ 3^2 + 4 × 2 เท่ากับเท่าใด?",
        "options": ["15", "17", "19", "21"],
        "correct_answer_index": 1,
        "explanation": "ทำคูณก่อน: 4×2=8, แล้ว 3²=9 → 9+8=17",
        "category": Category.GENERAL_APTITUDE.value,
        "difficulty": Difficulty.EASY.value,
    },
    {
        "question_text": "คำว่า \"สุจริต\" หมายถึงอะไร?",
        "options": ["ซื่อสัตย์", "ขี้โกง", "ขี้โมโห", "ขี้อาย"],
        "correct_answer_index": 0,
        "explanation": "\"สุจริต\" หมายถึง ซื่อสัตย์ ไม่ทุจริต",
        "category": Category.THAI_LANGUAGE.value,
        "difficulty": Difficulty.EASY.value,
    },
    {
        "question_text": "หน่วยความจำหลักของคอมพิวเตอร์คืออะไร?",
        "options": ["RAM", "Hard Disk", "USB Drive", "CD-ROM"],
        "correct_answer_index": 0,
        "explanation": "RAM (Random Access Memory) เป็นหน่วยความจำหลักที่ CPU ใช้ประมวลผลชั่วคราว",
        "category": Category.COMPUTER.value,
        "difficulty": Difficulty.MEDIUM.value,
    },
    {
        "question_text": "Choose the correct sentence with proper grammar:",
        "options": [
            "She have been working here for five years.",
            "She has been working here for five years.",
            "She is been working here for five years.",
            "She was been working here for five years.",
        ],
        "correct_answer_index": 1,
        "explanation": "ประธานเอกพจน์ \"She\" ใช้ \"has\" ใน Present Perfect Continuous Tense",
        "category": Category.ENGLISH.value,
        "difficulty": Difficulty.MEDIUM.value,
    },
]


def seed_sample_data(repository: QuestionRepositoryService) -> None:
    """Load the sample questions into an empty bank"""
    if repository.count() > 0:
        return
    success, errors = repository.create_many(SAMPLE_QUESTIONS)
    logger.info("Seeded %d sample questions (%d failed)", success, errors)
