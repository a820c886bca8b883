"""
Static content: health categories, fallback recommendations and the sample
articles shown when a user has no reading history.
"""
from typing import Dict, List

RECENTLY_READ = "Recently Read Articles"

CONTENT_CATEGORIES: Dict[str, Dict] = {
    "Fitness / General Physical Health": {
        "query": 'workout OR exercise OR "physical health" OR fitness',
        "videoSources": ["MadFit", "Yoga with Adriene", "ATHLEAN-X", "Doctor Mike"],
    },
    "Nutrition & Healthy Eating": {
        "query": 'nutrition OR "healthy eating" OR diet OR "healthy food"',
        "videoSources": ["Clean & Delicious", "Abbey's Kitchen", "Mind Over Munch", "NutritionFacts.org"],
    },
    "Mental Health & Stress Management": {
        "query": '"mental health" OR stress OR anxiety OR meditation OR mindfulness',
        "videoSources": ["Headspace", "The Mindful Movement", "Therapy in a Nutshell", "Psych Hub"],
    },
    "Chronic Disease Management": {
        "query": 'diabetes OR hypertension OR "chronic disease" OR "blood pressure"',
        "videoSources": ["Diabetes UK", "Mayo Clinic", "Cleveland Clinic", "Dr. Eric Berg"],
    },
    "Sleep & Recovery": {
        "query": 'sleep OR insomnia OR "sleep quality" OR "sleep hygiene"',
        "videoSources": ["Matthew Walker", "The Sleep Doctor", "Jason Stephenson", "Ted-Ed"],
    },
    "Women's Health": {
        "query": '"women\'s health" OR menopause OR "breast health" OR "women wellness"',
        "videoSources": ["Mama Doctor Jones", "North American Menopause Society", "Johns Hopkins Medicine"],
    },
    "Men's Health": {
        "query": '"men\'s health" OR testosterone OR prostate OR "men wellness"',
        "videoSources": ["Movember Foundation", "ATHLEAN-X", "Doctor Mike", "Cleveland Clinic"],
    },
    "Child & Teen Health": {
        "query": '"children\'s health" OR "teen health" OR "child development" OR pediatrics',
        "videoSources": ["CDC", "Johns Hopkins Medicine", "PE With Joe", "UNICEF"],
    },
}


def _item(id_: str, title: str, source: str, url: str, description: str, type_: str, **extra) -> Dict:
    item = {
        "id": id_,
        "title": title,
        "source": {"name": source},
        "url": url,
        "description": description,
        "type": type_,
    }
    item.update(extra)
    return item


STATIC_RECOMMENDATIONS: Dict[str, List[Dict]] = {
    "Fitness / General Physical Health": [
        _item(
            "static-fitness-0",
            "10-Minute Full Body Workout for Beginners – No Equipment",
            "MadFit",
            "https://www.youtube.com/watch?v=UBMk30rjy0o",
            "Quick beginner-friendly workout routine that requires no equipment",
            "video",
        ),
        _item(
            "static-fitness-1",
            "Beginner's Guide to Stretching",
            "Yoga with Adriene",
            "https://www.youtube.com/watch?v=qULTwquOuT4",
            "Easy stretching routine to improve flexibility and prevent injuries",
            "video",
        ),
        _item(
            "static-fitness-2",
            "30 Minute Fat Burning Home Workout for Beginners",
            "Roberta's Gym",
            "https://www.youtube.com/watch?v=gC_L9qAHVJ8",
            "Low-impact cardio workout suitable for beginner fitness levels",
            "video",
        ),
    ],
    "Nutrition & Healthy Eating": [
        _item(
            "static-nutrition-0",
            "Healthy Eating – What You Need to Know",
            "NHS Choices",
            "https://www.nhs.uk/live-well/eat-well/",
            "Essential nutrition basics from trusted healthcare professionals",
            "article",
        ),
        _item(
            "static-nutrition-1",
            "How to Start Eating Healthy (for Beginners)",
            "Clean & Delicious",
            "https://www.youtube.com/watch?v=xUHc_Xc-oRg",
            "Simple steps to transition to healthier eating patterns",
            "video",
        ),
        _item(
            "static-nutrition-2",
            "Nutrition Basics | Macronutrients Explained",
            "Abbey's Kitchen",
            "https://www.youtube.com/watch?v=fdRFXGI_aSI",
            "Learn about proteins, carbs, and fats and their role in your diet",
            "video",
        ),
    ],
    "Mental Health & Stress Management": [
        _item(
            "static-mental-0",
            "Every Mind Matters",
            "NHS",
            "https://www.nhs.uk/every-mind-matters/",
            "Practical tips to look after your mental health and cope with stress",
            "article",
        ),
        _item(
            "static-mental-1",
            "Stress Management",
            "Mayo Clinic",
            "https://www.mayoclinic.org/healthy-lifestyle/stress-management/basics/stress-basics/hlv-20049495",
            "How stress affects the body and simple strategies to manage it",
            "article",
        ),
    ],
    "Chronic Disease Management": [
        _item(
            "static-chronic-0",
            "Living with Diabetes",
            "CDC",
            "https://www.cdc.gov/diabetes/living-with/index.html",
            "Everyday steps for managing diabetes and preventing complications",
            "article",
        ),
        _item(
            "static-chronic-1",
            "High Blood Pressure",
            "NHS",
            "https://www.nhs.uk/conditions/high-blood-pressure-hypertension/",
            "Causes, risks and lifestyle changes that help control blood pressure",
            "article",
        ),
    ],
    "Sleep & Recovery": [
        _item(
            "static-sleep-0",
            "How to Get to Sleep",
            "NHS",
            "https://www.nhs.uk/live-well/sleep-and-tiredness/how-to-get-to-sleep/",
            "Sleep hygiene basics for falling asleep and staying asleep",
            "article",
        ),
        _item(
            "static-sleep-1",
            "About Sleep",
            "CDC",
            "https://www.cdc.gov/sleep/about/index.html",
            "How much sleep you need and why it matters for your health",
            "article",
        ),
    ],
    "Women's Health": [
        _item(
            "static-women-0",
            "Menopause",
            "NHS",
            "https://www.nhs.uk/conditions/menopause/",
            "Symptoms of menopause and the treatments that can help",
            "article",
        ),
        _item(
            "static-women-1",
            "Women's Health",
            "World Health Organization",
            "https://www.who.int/health-topics/women-s-health",
            "Key health issues affecting women across the life course",
            "article",
        ),
    ],
    "Men's Health": [
        _item(
            "static-men-0",
            "Men's Health",
            "NHS",
            "https://www.nhs.uk/live-well/",
            "Lifestyle advice covering exercise, diet and regular health checks",
            "article",
        ),
        _item(
            "static-men-1",
            "Prostate Cancer Screening",
            "CDC",
            "https://www.cdc.gov/prostate-cancer/screening/index.html",
            "What to know before deciding about prostate cancer screening",
            "article",
        ),
    ],
    "Child & Teen Health": [
        _item(
            "static-child-0",
            "Child Development",
            "CDC",
            "https://www.cdc.gov/child-development/index.html",
            "Milestones and positive parenting tips by age",
            "article",
        ),
        _item(
            "static-child-1",
            "Adolescent Health",
            "World Health Organization",
            "https://www.who.int/health-topics/adolescent-health",
            "Health needs of teenagers and how to support them",
            "article",
        ),
    ],
    RECENTLY_READ: [
        _item(
            "recent-0",
            "Introduction to Human Anatomy",
            "MediLearn",
            "/quiz",
            "Test your knowledge with 10 questions on human anatomy basics",
            "quiz",
            contentType="quiz",
            quizQuestions=10,
        ),
        _item(
            "recent-1",
            "Medical Terminology Basics",
            "MediLearn",
            "/flashcards",
            "Study essential medical terms with these flashcards",
            "flashcards",
            contentType="flashcards",
            cardCount=25,
        ),
        _item(
            "recent-2",
            "Recent Advances in Immunotherapy",
            "MediLearn Journal",
            "/",
            "Learn about the latest breakthroughs in cancer immunotherapy research",
            "article",
            readTime="5 min read",
        ),
    ],
}

# Stats fallback when a user has no reading history
FALLBACK_ARTICLES: List[Dict] = [
    {"id": 1, "title": "Understanding Cardiovascular Health", "date": "2023-04-15"},
    {"id": 2, "title": "Nutrition Basics for Health Professionals", "date": "2023-04-10"},
    {"id": 3, "title": "Latest Advances in Immunology", "date": "2023-04-05"},
]
FALLBACK_QUIZZES_TAKEN = 5
FALLBACK_FLASHCARDS_REVIEWED = 43
