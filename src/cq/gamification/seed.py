"""Catalog seed data: six cultures, their question banks and five achievements."""

from __future__ import annotations

import logging

from cq.gamification.progression import get_or_create_stats
from cq.store.base import RecordStore
from cq.store.records import Achievement, Kind, Question, Topic

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w={}&h={}"


def _banner(photo: str) -> str:
    return _IMG.format(photo, 800, 400)


def _picture(photo: str) -> str:
    return _IMG.format(photo, 600, 400)


TOPIC_SEED_DATA: list[dict] = [
    {
        "name": "Japanese",
        "country": "Japan",
        "flag": "\U0001f1ef\U0001f1f5",
        "image_url": _banner("1528164344705-47542687000d"),
        "description": "Explore traditions, cuisine, festivals, and modern culture of Japan",
        "total_questions": 8,
        "estimated_time": 15,
        "questions": [
            {
                "type": "visual",
                "prompt": "Which traditional Japanese art form is shown in this image?",
                "image_url": _picture("1578662996442-48f60103fc96"),
                "options": ["Origami (Paper Folding)", "Ikebana (Flower Arranging)", "Shodō (Calligraphy)", "Raku (Pottery)"],
                "correct_answer": "Origami (Paper Folding)",
                "cultural_fact": (
                    "Origami, meaning 'folding paper,' is a traditional Japanese art form that transforms flat "
                    "sheets of paper into beautiful sculptures without cuts or glue. The practice dates back to "
                    "the 6th century and teaches patience, precision, and creativity."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "What is the traditional Japanese tea ceremony called?",
                "options": ["Chanoyu", "Sushi", "Kabuki", "Haiku"],
                "correct_answer": "Chanoyu",
                "cultural_fact": (
                    "Chanoyu, also known as the Way of Tea, is a Japanese cultural activity involving the "
                    "ceremonial preparation and presentation of matcha tea. It embodies the principles of "
                    "harmony, respect, purity, and tranquility."
                ),
                "difficulty": 2,
            },
            {
                "type": "trivia",
                "prompt": "Which Japanese festival celebrates the cherry blossom season?",
                "options": ["Hanami", "Obon", "Tanabata", "Shichi-Go-San"],
                "correct_answer": "Hanami",
                "cultural_fact": (
                    "Hanami literally means 'flower viewing' and is the Japanese traditional custom of enjoying "
                    "the transient beauty of flowers, particularly cherry blossoms. People gather for picnics "
                    "under blooming sakura trees."
                ),
                "difficulty": 1,
            },
            {
                "type": "visual",
                "prompt": "What type of traditional Japanese architecture is shown?",
                "image_url": _picture("1480796927426-f609979314bd"),
                "options": ["Buddhist Temple", "Shinto Shrine", "Imperial Palace", "Tea House"],
                "correct_answer": "Shinto Shrine",
                "cultural_fact": (
                    "Shinto shrines are sacred spaces in Japanese Shintoism, characterized by their distinctive "
                    "torii gates, clean architectural lines, and natural settings. They serve as dwelling places "
                    "for kami (spirits or gods)."
                ),
                "difficulty": 2,
            },
        ],
    },
    {
        "name": "Indian",
        "country": "India",
        "flag": "\U0001f1ee\U0001f1f3",
        "image_url": _banner("1564507592333-c60657eea523"),
        "description": "Discover diverse traditions, languages, festivals, and rich heritage",
        "total_questions": 8,
        "estimated_time": 18,
        "questions": [
            {
                "type": "visual",
                "prompt": "Which famous Indian monument is shown in this image?",
                "image_url": _picture("1564507592333-c60657eea523"),
                "options": ["Red Fort", "Taj Mahal", "Hawa Mahal", "Qutub Minar"],
                "correct_answer": "Taj Mahal",
                "cultural_fact": (
                    "The Taj Mahal is a white marble mausoleum built by Mughal emperor Shah Jahan for his wife "
                    "Mumtaz Mahal. It's considered one of the finest examples of Mughal architecture and is a "
                    "UNESCO World Heritage Site."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "What is the festival of lights called in India?",
                "options": ["Holi", "Diwali", "Durga Puja", "Navratri"],
                "correct_answer": "Diwali",
                "cultural_fact": (
                    "Diwali, also known as Deepavali, is the Hindu festival of lights celebrated across India. "
                    "It symbolizes the victory of light over darkness and good over evil, lasting five days "
                    "with oil lamps, fireworks, and sweets."
                ),
                "difficulty": 1,
            },
        ],
    },
    {
        "name": "Brazilian",
        "country": "Brazil",
        "flag": "\U0001f1e7\U0001f1f7",
        "image_url": _banner("1516306580123-e6e52b1b7b5f"),
        "description": "Experience carnival, music, dance, cuisine, and vibrant lifestyle",
        "total_questions": 8,
        "estimated_time": 12,
        "questions": [
            {
                "type": "trivia",
                "prompt": "What is Brazil's most famous carnival celebration city?",
                "options": ["São Paulo", "Rio de Janeiro", "Salvador", "Recife"],
                "correct_answer": "Rio de Janeiro",
                "cultural_fact": (
                    "Rio de Janeiro's Carnival is the world's largest carnival celebration, attracting millions "
                    "of participants and spectators. It features elaborate parades, samba schools, colorful "
                    "costumes, and street parties called 'blocos'."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "Which dance originated in Brazil?",
                "options": ["Tango", "Samba", "Salsa", "Flamenco"],
                "correct_answer": "Samba",
                "cultural_fact": (
                    "Samba is a Brazilian dance and music genre with African and European influences. It became "
                    "the signature dance of Brazilian Carnival and represents the joyful, rhythmic spirit of "
                    "Brazilian culture."
                ),
                "difficulty": 1,
            },
        ],
    },
    {
        "name": "Egyptian",
        "country": "Egypt",
        "flag": "\U0001f1ea\U0001f1ec",
        "image_url": _banner("1568322445389-f64ac2515020"),
        "description": "Uncover ancient history, pharaohs, pyramids, and modern Egypt",
        "total_questions": 8,
        "estimated_time": 20,
        "questions": [
            {
                "type": "visual",
                "prompt": "Which ancient Egyptian structure is shown?",
                "image_url": _picture("1539650116574-75c0c6d73f6e"),
                "options": ["Great Pyramid of Giza", "Temple of Karnak", "Abu Simbel", "Valley of the Kings"],
                "correct_answer": "Great Pyramid of Giza",
                "cultural_fact": (
                    "The Great Pyramid of Giza is the oldest and largest of the three pyramids in the Giza "
                    "pyramid complex. Built around 2580-2510 BC for Pharaoh Khufu, it was the tallest man-made "
                    "structure in the world for over 3,800 years."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "What was the ancient Egyptian writing system called?",
                "options": ["Cuneiform", "Hieroglyphics", "Sanskrit", "Phoenician"],
                "correct_answer": "Hieroglyphics",
                "cultural_fact": (
                    "Egyptian hieroglyphics were a formal writing system used by ancient Egyptians, combining "
                    "logographic and alphabetic elements. The word 'hieroglyph' comes from Greek meaning "
                    "'sacred carving'."
                ),
                "difficulty": 2,
            },
        ],
    },
    {
        "name": "Chinese",
        "country": "China",
        "flag": "\U0001f1e8\U0001f1f3",
        "image_url": _banner("1508804185872-d7badad00f7d"),
        "description": "Learn about dynasties, philosophy, arts, cuisine, and traditions",
        "total_questions": 8,
        "estimated_time": 16,
        "questions": [
            {
                "type": "visual",
                "prompt": "What famous Chinese landmark is shown?",
                "image_url": _picture("1508804185872-d7badad00f7d"),
                "options": ["Forbidden City", "Great Wall of China", "Temple of Heaven", "Terracotta Army"],
                "correct_answer": "Great Wall of China",
                "cultural_fact": (
                    "The Great Wall of China is a series of fortifications built to protect Chinese states from "
                    "northern invasions. Stretching over 13,000 miles, it's one of the most impressive "
                    "architectural feats in human history."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "What is the Chinese New Year also known as?",
                "options": ["Dragon Festival", "Spring Festival", "Lantern Festival", "Moon Festival"],
                "correct_answer": "Spring Festival",
                "cultural_fact": (
                    "Chinese New Year, also called Spring Festival, is the most important traditional Chinese "
                    "holiday. It marks the beginning of the lunar new year and is celebrated with family "
                    "reunions, fireworks, and red decorations for good luck."
                ),
                "difficulty": 1,
            },
        ],
    },
    {
        "name": "Mexican",
        "country": "Mexico",
        "flag": "\U0001f1f2\U0001f1fd",
        "image_url": _banner("1518638150340-f706e86654de"),
        "description": "Explore festivals, cuisine, art, history, and vibrant traditions",
        "total_questions": 8,
        "estimated_time": 14,
        "questions": [
            {
                "type": "trivia",
                "prompt": "What is the Day of the Dead called in Spanish?",
                "options": ["Cinco de Mayo", "Día de los Muertos", "Las Posadas", "Quinceañera"],
                "correct_answer": "Día de los Muertos",
                "cultural_fact": (
                    "Día de los Muertos (Day of the Dead) is a Mexican holiday celebrating deceased loved "
                    "ones. Families create altars (ofrendas) with photos, favorite foods, and marigold flowers "
                    "to welcome spirits back to the world of the living."
                ),
                "difficulty": 1,
            },
            {
                "type": "trivia",
                "prompt": "Which ancient civilization built the pyramid at Chichen Itza?",
                "options": ["Aztecs", "Maya", "Olmecs", "Zapotecs"],
                "correct_answer": "Maya",
                "cultural_fact": (
                    "Chichen Itza was built by the Maya civilization and is one of the New Seven Wonders of the "
                    "World. The main pyramid, El Castillo, demonstrates the Maya's advanced knowledge of "
                    "astronomy and mathematics."
                ),
                "difficulty": 2,
            },
        ],
    },
]

ACHIEVEMENT_SEED_DATA: list[dict] = [
    {
        "title": "Cultural Explorer",
        "description": "Complete your first cultural challenge",
        "points": 100,
        "icon": "\U0001f30d",
        "requirement": "complete_first_challenge",
    },
    {
        "title": "Perfect Score",
        "description": "Get 100% accuracy on any culture quiz",
        "points": 250,
        "icon": "\U0001f31f",
        "requirement": "perfect_score",
    },
    {
        "title": "Culture Master",
        "description": "Complete all challenges for any culture",
        "points": 500,
        "icon": "\U0001f3c6",
        "requirement": "complete_culture",
    },
    {
        "title": "Global Citizen",
        "description": "Explore 5 different cultures",
        "points": 750,
        "icon": "\U0001f310",
        "requirement": "explore_5_cultures",
    },
    {
        "title": "Speed Learner",
        "description": "Complete a quiz in under 5 minutes",
        "points": 200,
        "icon": "⚡",
        "requirement": "speed_completion",
    },
]


async def seed_catalog(store: RecordStore) -> dict[str, int]:
    """Insert reference data into an empty store. Idempotent.

    Topics (with their questions) are matched by name and achievements by
    requirement key, so a second run inserts nothing. Also makes sure the
    Stats singleton exists. Returns the number of records inserted per kind.
    """
    inserted = {"topics": 0, "questions": 0, "achievements": 0}

    async with store.transaction():
        existing_topics = {t.name for t in await store.list(Kind.TOPIC)}
        for topic_data in TOPIC_SEED_DATA:
            if topic_data["name"] in existing_topics:
                continue
            fields = {k: v for k, v in topic_data.items() if k != "questions"}
            topic = await store.put(Kind.TOPIC, Topic(**fields))
            inserted["topics"] += 1
            for question_data in topic_data["questions"]:
                await store.put(Kind.QUESTION, Question(topic_id=topic.id, **question_data))
                inserted["questions"] += 1

        existing_requirements = {a.requirement for a in await store.list(Kind.ACHIEVEMENT)}
        for achievement_data in ACHIEVEMENT_SEED_DATA:
            if achievement_data["requirement"] in existing_requirements:
                continue
            await store.put(Kind.ACHIEVEMENT, Achievement(**achievement_data))
            inserted["achievements"] += 1

        await get_or_create_stats(store)

    logger.info(
        "Seeded %d topics, %d questions, %d achievements",
        inserted["topics"],
        inserted["questions"],
        inserted["achievements"],
    )
    return inserted
