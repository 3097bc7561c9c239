"""Stock cybersecurity content: three quizzes, four mini-games, team challenges."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import func, select

from cyberquest.database import unit_of_work
from cyberquest.db.models import Activity, Question, Quiz, TeamChallenge, User
from cyberquest.users.service import get_or_create_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

DEMO_USER: dict[str, str] = {
    "email": "alex@cybersec.learn",
    "username": "cybersec_learner",
    "first_name": "Alex",
    "last_name": "Security",
}

QUIZ_SEED_DATA: list[dict[str, Any]] = [
    {
        "title": "Cybersecurity Fundamentals",
        "description": "Essential cybersecurity concepts for beginners",
        "category": "Cybersecurity",
        "difficulty": "easy",
        "time_limit": 45,
        "questions": [
            ("What does the 'S' in HTTPS stand for?", ["Server", "Secure", "System", "Standard"], 1),
            ("Which of the following is considered a strong password?", ["password123", "123456", "P@ssw0rd#2024!", "qwerty"], 2),
            ("What is phishing?", ["A type of malware", "A method to catch fish", "A social engineering attack", "A firewall technique"], 2),
            ("Which protocol is used for secure email transmission?", ["HTTP", "FTP", "SMTP", "TLS/SSL"], 3),
            ("What is the primary purpose of a firewall?", ["Speed up internet", "Block malicious traffic", "Store passwords", "Encrypt files"], 1),
        ],
        "points": 10,
    },
    {
        "title": "Network Security & Threats",
        "description": "Advanced network security concepts and threat analysis",
        "category": "Cybersecurity",
        "difficulty": "medium",
        "time_limit": 60,
        "questions": [
            ("Which type of attack involves overwhelming a server with traffic?", ["SQL Injection", "Cross-Site Scripting", "DDoS Attack", "Man-in-the-Middle"], 2),
            ("What is the main difference between symmetric and asymmetric encryption?", ["Speed of encryption", "Key usage", "Algorithm complexity", "File size"], 1),
            ("Which of these is NOT a common vulnerability in web applications?", ["SQL Injection", "Buffer Overflow", "CSRF", "Physical Access"], 3),
            ("What does IDS stand for in cybersecurity?", ["Internet Detection System", "Intrusion Detection System", "Internal Defense System", "Identity Defense Service"], 1),
            ("Which hashing algorithm is considered most secure currently?", ["MD5", "SHA-1", "SHA-256", "CRC32"], 2),
        ],
        "points": 15,
    },
    {
        "title": "Advanced Cyber Defense",
        "description": "Expert-level cybersecurity challenges and advanced topics",
        "category": "Cybersecurity",
        "difficulty": "hard",
        "time_limit": 90,
        "questions": [
            ("In a zero-day exploit, what does 'zero-day' refer to?", ["Time to patch", "Days since discovery", "Attack duration", "Vulnerability lifespan"], 0),
            ("Which technique is used in advanced persistent threats (APTs)?", ["Quick in-and-out attacks", "Long-term stealthy presence", "Brute force attacks", "Social media manipulation"], 1),
            ("What is the primary goal of threat hunting?", ["Patch vulnerabilities", "Proactively find threats", "Train employees", "Install security tools"], 1),
            ("Which framework is commonly used for incident response?", ["OWASP", "NIST", "ISO 27001", "COBIT"], 1),
            ("What is lateral movement in cybersecurity?", ["Moving between network segments", "Physical security movement", "Data transfer protocols", "Firewall configuration"], 0),
        ],
        "points": 20,
    },
]

ACTIVITY_SEED_DATA: list[dict[str, Any]] = [
    {
        "title": "Security Term Scramble",
        "description": "Unscramble cybersecurity terms and strengthen your security vocabulary.",
        "type": "word_scramble",
        "category": "Cybersecurity",
        "difficulty": "easy",
        "time_estimate": "5-10 min",
        "max_score": 100,
        "image_url": "https://images.unsplash.com/photo-1563986768609-322da13575f3?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
        "is_new": True,
        "game_data": {
            "words": ["FIREWALL", "ENCRYPTION", "MALWARE", "PHISHING", "AUTHENTICATION", "VULNERABILITY", "INTRUSION", "CRYPTOGRAPHY"],
        },
    },
    {
        "title": "Cyber Threat Sequence",
        "description": "Identify patterns in cybersecurity attack sequences and improve threat detection skills.",
        "type": "number_puzzle",
        "category": "Cybersecurity",
        "difficulty": "medium",
        "time_estimate": "10-15 min",
        "max_score": 150,
        "image_url": "https://images.unsplash.com/photo-1550751827-4bd374c3f58b?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
        "is_popular": True,
        "game_data": {
            "puzzles": [
                {"sequence": [1, 2, 4, 8, 16], "answer": 32, "hint": "Binary progression"},
                {"sequence": [80, 443, 22, 21], "answer": 25, "hint": "Common port numbers"},
                {"sequence": [128, 192, 256, 384], "answer": 512, "hint": "Encryption key sizes"},
            ],
        },
    },
    {
        "title": "Security Symbol Match",
        "description": "Match cybersecurity symbols and icons to improve pattern recognition skills.",
        "type": "memory_match",
        "category": "Cybersecurity",
        "difficulty": "easy",
        "time_estimate": "3-8 min",
        "max_score": 200,
        "image_url": "https://images.unsplash.com/photo-1555949963-aa79dcee981c?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
        "game_data": {
            "gridSize": 4,
            "symbols": ["🔒", "🛡️", "🔑", "⚠️", "🚨", "🔐", "🛠️", "🎯"],
        },
    },
    {
        "title": "Password Cracking Challenge",
        "description": "Learn about password security by understanding common attack patterns.",
        "type": "word_scramble",
        "category": "Cybersecurity",
        "difficulty": "hard",
        "time_estimate": "8-12 min",
        "max_score": 120,
        "image_url": "https://images.unsplash.com/photo-1555949963-aa79dcee981c?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
        "game_data": {
            "words": ["BRUTEFORCE", "DICTIONARY", "RAINBOW", "SALTING", "HASHING", "KEYLOGGER"],
        },
    },
]

TEAM_CHALLENGE_SEED_DATA: list[dict[str, Any]] = [
    # Red team (offensive)
    {
        "title": "Reconnaissance Basics",
        "description": "Map an exposed host and list the services an attacker would probe first.",
        "team": "red",
        "category": "Reconnaissance",
        "difficulty": "easy",
        "type": "simulation",
        "content": {"target": "10.0.0.5", "open_ports": [22, 80, 443], "goal": "identify_services"},
        "max_score": 100,
        "unlock_level": 1,
    },
    {
        "title": "Phishing Campaign Design",
        "description": "Spot the social engineering cues a convincing pretext relies on.",
        "team": "red",
        "category": "Social Engineering",
        "difficulty": "medium",
        "type": "quiz",
        "content": {"scenarios": 5},
        "max_score": 150,
        "unlock_level": 2,
    },
    {
        "title": "Web Exploitation Lab",
        "description": "Find and demonstrate an injection flaw in a deliberately vulnerable login form.",
        "team": "red",
        "category": "Web Security",
        "difficulty": "hard",
        "type": "lab",
        "content": {"vulnerability": "sql_injection"},
        "max_score": 200,
        "unlock_level": 3,
    },
    # White team (defensive)
    {
        "title": "Log Analysis",
        "description": "Review authentication logs and flag the brute-force attempt.",
        "team": "white",
        "category": "Monitoring",
        "difficulty": "easy",
        "type": "simulation",
        "content": {"log_lines": 200, "goal": "flag_bruteforce"},
        "max_score": 100,
        "unlock_level": 1,
    },
    {
        "title": "Firewall Rule Review",
        "description": "Decide which firewall rules expose the network and which protect it.",
        "team": "white",
        "category": "Network Defense",
        "difficulty": "medium",
        "type": "quiz",
        "content": {"rules": 8},
        "max_score": 150,
        "unlock_level": 2,
    },
    {
        "title": "Incident Response Drill",
        "description": "Contain a simulated ransomware outbreak following the NIST response phases.",
        "team": "white",
        "category": "Incident Response",
        "difficulty": "hard",
        "type": "lab",
        "content": {"framework": "NIST"},
        "max_score": 200,
        "unlock_level": 3,
    },
]


async def _seed_content(db: AsyncSession) -> bool:
    """Insert quizzes, activities and challenges unless quizzes already exist."""
    existing = (await db.execute(select(func.count()).select_from(Quiz))).scalar_one()
    if existing:
        return False

    async with unit_of_work(db, "seed_catalog"):
        for quiz_data in QUIZ_SEED_DATA:
            quiz = Quiz(
                title=quiz_data["title"],
                description=quiz_data["description"],
                category=quiz_data["category"],
                difficulty=quiz_data["difficulty"],
                time_limit=quiz_data["time_limit"],
            )
            db.add(quiz)
            await db.flush()
            for order, (text, options, correct) in enumerate(quiz_data["questions"], start=1):
                db.add(
                    Question(
                        quiz_id=quiz.id,
                        question_text=text,
                        options=options,
                        correct_answer=correct,
                        points=quiz_data["points"],
                        order=order,
                    )
                )
        for activity_data in ACTIVITY_SEED_DATA:
            db.add(Activity(**activity_data))
        for challenge_data in TEAM_CHALLENGE_SEED_DATA:
            db.add(TeamChallenge(**challenge_data))
    return True


async def seed_catalog(db: AsyncSession) -> User:
    """Load the stock catalog once and ensure the demo learner exists.

    Returns the demo user.
    """
    created = await _seed_content(db)
    user, _ = await get_or_create_user(db, **DEMO_USER)
    logger.info(
        "catalog_seeded",
        quizzes=len(QUIZ_SEED_DATA) if created else 0,
        activities=len(ACTIVITY_SEED_DATA) if created else 0,
        challenges=len(TEAM_CHALLENGE_SEED_DATA) if created else 0,
        demo_user_id=user.id,
    )
    return user
