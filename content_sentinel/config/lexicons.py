"""Lexical resources for the local classifier.

Bilingual (English + Hindi/Hinglish) tables:
- STOPWORDS: tokens dropped during preprocessing
- SENTIMENT_LEXICON: AFINN-style integer valences (-5..+5) for single words
- SENTIMENT_PHRASES: valences for multi-word or punctuated expressions
- CATEGORY_KEYWORDS: one ruleset of literal phrases per harm category;
  dict order is the tie-break order for equal category scores
- HARM_PATTERNS: regex groups feeding the toxicity score

Tables are plain constants so they can be reviewed and extended without
touching the scoring code.
"""

from typing import Dict, List, Tuple

STOPWORDS: frozenset = frozenset({
    # English
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "this", "but", "they", "have",
    "had", "what", "said", "each", "which", "she", "do", "how", "their",
    "if", "up", "out", "many", "then", "them", "these", "so", "some",
    "her", "would", "make", "like", "into", "him", "time", "two", "more",
    "go", "no", "way", "could", "my", "than", "first", "been", "call",
    "who", "oil", "sit", "now", "find", "down", "day", "did", "get",
    "come", "made", "may", "part",
    # Hindi / Hinglish
    "ka", "ki", "ke", "ko", "se", "me", "par", "hai", "hain", "tha", "thi",
    "aur", "ya", "jo", "yah", "vah", "us", "ek", "teen", "char",
    "main", "tum", "aap", "hum", "woh", "kya", "kaise", "kahan", "kab", "kyun",
})

# Word-level valences (AFINN scale)
SENTIMENT_LEXICON: Dict[str, int] = {
    # Positive (English)
    "amazing": 4, "awesome": 4, "excellent": 3, "fantastic": 4, "great": 3,
    "wonderful": 4, "brilliant": 4, "outstanding": 5, "superb": 5,
    "magnificent": 4, "marvelous": 3, "incredible": 3, "fabulous": 4,
    "terrific": 4, "perfect": 3, "beautiful": 3, "lovely": 3, "gorgeous": 3,
    "stunning": 4, "impressive": 3, "remarkable": 2, "extraordinary": 3,
    "phenomenal": 4, "spectacular": 4, "breathtaking": 5, "love": 3,
    "loved": 3, "good": 3, "nice": 3, "happy": 3, "best": 3, "enjoy": 2,
    "fun": 4, "glad": 3, "thanks": 2, "thank": 2, "win": 4, "wow": 4,
    "congratulations": 2, "helpful": 2, "kind": 2, "cool": 1,
    # Negative (English)
    "terrible": -3, "awful": -3, "horrible": -3, "disgusting": -3,
    "pathetic": -2, "useless": -2, "worthless": -2, "disappointing": -2,
    "frustrating": -2, "annoying": -2, "irritating": -3, "boring": -3,
    "dull": -2, "bland": -1, "mediocre": -3, "poor": -2, "bad": -3,
    "worst": -3, "hate": -3, "hated": -3, "dislike": -2, "despise": -3,
    "loathe": -3, "detest": -3, "abhor": -3, "stupid": -2, "ugly": -3,
    "kill": -3, "die": -3, "death": -2, "murder": -2, "idiot": -3,
    "dumb": -3, "loser": -3, "moron": -3, "fake": -3, "hoax": -2,
    "scam": -2, "fraud": -4, "threat": -2, "attack": -1, "destroy": -3,
    "torture": -4, "war": -2, "sad": -2, "angry": -3, "fear": -2,
    "wrong": -2, "lie": -2, "liar": -3, "racist": -3, "nasty": -3,
    "gross": -2, "evil": -3, "sick": -2, "sucks": -3, "waste": -1,
    "fail": -2, "failure": -2, "fuck": -4, "shit": -4, "bitch": -5,
    "damn": -4, "hell": -4, "crap": -3, "bastard": -5, "asshole": -4,
    # Positive (Hindi / Hinglish)
    "zabardast": 3, "kamaal": 3, "shandar": 3, "behtreen": 3, "lajawab": 3,
    "khoobsurat": 3, "sundar": 3, "pyara": 3, "meetha": 2, "mazedaar": 3,
    "dilchasp": 2, "rochak": 2, "anokha": 2, "adbhut": 3, "vishesh": 2,
    "uttam": 3,
    # Negative (Hindi / Hinglish)
    "ganda": -3, "bura": -3, "bekaar": -3, "ghatiya": -3, "faltu": -3,
    "bakwas": -3, "bekar": -3, "kharab": -3, "galat": -2, "nafrat": -3,
    "sust": -1, "kamzor": -2, "badsurat": -3,
}

# Multi-word / punctuated expressions, counted on the lower-cased raw text
SENTIMENT_PHRASES: Dict[str, int] = {
    "mind-blowing": 4,
    "jaw-dropping": 4,
    "awe-inspiring": 4,
    "heart-warming": 3,
    "bahut accha": 3,
    "can't stand": -3,
    "pasand nahi": -3,
}

# Ordered: earlier categories win ties
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "fake_news": [
        "fake", "hoax", "conspiracy", "false", "misleading", "debunked",
        "unverified", "rumor", "misinformation", "propaganda", "lie", "lies",
        "fabricated", "doctored", "manipulated", "staged", "planted", "bogus",
        "phony", "counterfeit", "forged", "altered", "photoshopped", "deepfake",
        "clickbait", "sensational",
        "jhooth", "jhoothi", "jhootha", "galat", "fake news", "bakwas",
        "dhokha", "fraud", "farzi", "nakli", "banawati", "ghadha hua",
        "saazish", "chalaki", "makkar", "chhupana", "chhalawa", "bewakoofi",
        "andha vishwas", "afwah", "khabar", "gumrah", "bhramit",
        "galat jaankari",
    ],
    "hate_speech": [
        "hate", "racist", "discrimination", "bigot", "prejudice",
        "supremacist", "nazi", "fascist", "xenophobic", "homophobic",
        "transphobic", "islamophobic", "antisemitic", "casteist", "communal",
        "sectarian", "ethnic cleansing", "genocide", "apartheid", "segregation",
        "lynch", "mob justice", "vigilante",
        "nafrat", "ghrina", "jaati", "dharm", "muslim", "hindu", "sikh",
        "christian", "bhed-bhaav", "untouchable", "neech", "kamina", "harijan",
        "dalit", "brahmin", "kshatriya", "vaishya", "shudra", "achhoot",
        "chhoti jaati", "oonchi jaati", "jaat-paat", "sampradayik", "mazhabi",
        "kafir", "mleccha", "vidharmi", "gaddaar", "deshdrohi",
    ],
    "harassment": [
        "harass", "bully", "threat", "intimidate", "stalk", "abuse",
        "cyberbully", "troll", "doxx", "blackmail", "extort", "menace",
        "terrorize", "persecute", "torment", "victimize", "oppress", "coerce",
        "pressure", "force", "violate", "assault", "molest", "grope",
        "touch inappropriately", "sexual harassment",
        "pareshan", "tang", "dhamki", "dhamkana", "torture", "satana",
        "preshan karna", "zalim", "zulm", "anyay", "attyachar", "hinsa",
        "maar-peet", "dabana", "dabav", "zorjabardasti", "majboor karna",
        "gunda gardi", "badmashi", "goonda", "lafanga", "chheda chhedi",
        "badtameezi", "gandi harkat",
    ],
    "scam": [
        "scam", "fraud", "phishing", "ponzi", "pyramid", "bitcoin",
        "cryptocurrency", "investment", "money", "prize", "winner", "urgent",
        "limited time", "act now", "guaranteed", "lottery", "jackpot",
        "millionaire", "rich quick", "easy money", "work from home",
        "earn thousands", "no experience", "click here", "free gift",
        "congratulations", "selected", "exclusive offer", "limited offer",
        "hurry up", "dont miss", "last chance",
        "dhokha", "thagana", "paisa", "jeet", "inaam", "jaldi", "turant",
        "guarantee", "pakka", "crorepati", "lakhpati", "ameer", "daulat",
        "sampatti", "ghar baithe", "aasaan paisa", "jhatpat", "tez", "mauka",
        "avsar", "chhoot jayega", "antim mauka", "sirf aaj", "free mein",
        "muft", "bedaag",
    ],
    "misinformation": [
        "vaccine", "covid", "coronavirus", "cure", "treatment", "medicine",
        "health", "doctor", "medical", "study", "research", "science",
        "miracle cure", "natural remedy", "home remedy", "alternative medicine",
        "conspiracy", "government cover up", "big pharma", "side effects",
        "dangerous", "toxic", "poison", "autism", "infertility", "death",
        "microchip", "5g", "bill gates", "population control",
        "corona", "ilaj", "dawa", "hospital", "bimari", "sehat", "swasthya",
        "gharelu nuskha", "ayurveda", "homeopathy", "unani", "desi ilaj",
        "nuskha", "totka", "upay", "saazish", "sarkar", "chhupana",
        "dawa company", "nuksan", "kharab", "zeher", "maut", "chip",
    ],
    "cyberbullying": [
        "ugly", "stupid", "loser", "kill yourself", "die", "worthless",
        "pathetic", "freak", "weirdo", "nobody likes you", "fat", "skinny",
        "short", "tall", "dark", "fair", "bald", "hairy", "smelly",
        "disgusting", "gross", "hideous", "monster", "beast", "pig", "dog",
        "rat", "cockroach", "trash", "garbage", "waste", "useless", "hopeless",
        "failure", "reject", "outcast", "loner", "nerd", "geek",
        "bewakoof", "pagal", "ganda", "badsurat", "marjayega", "mar ja",
        "khudkhushi", "suicide", "khatam", "nikamma", "faltu", "bekar",
        "koi pasand nahi karta", "sab nafrat karte hain", "mota", "patla",
        "chota", "lamba", "kala", "gora", "takla", "baal wala", "badbu",
        "gandi smell", "ghatiya", "janwar", "kutta", "suar", "chuha", "kachra",
        "gandagi", "bekaar", "nalayak", "kamchor", "aalsi",
    ],
    "sexual_harassment": [
        "sexy", "hot", "beautiful", "gorgeous", "send pics", "nude", "naked",
        "strip", "undress", "kiss", "hug", "touch", "feel", "grab", "squeeze",
        "fondle", "grope", "molest", "rape", "sex", "sleep with", "bed",
        "bedroom", "private parts", "breast", "boobs", "ass", "butt", "penis",
        "vagina",
        "sundar", "khoobsurat", "photo bhejo", "nanga", "kapde utaro",
        "chumma", "pappi", "gale lagana", "chhuna", "haath lagana", "dabana",
        "chheda chhedi", "balatkar", "saath sona", "bistar", "kamra",
        "private", "chhati", "gaand", "lund", "choot", "randi", "raand",
    ],
    "violence": [
        "kill", "murder", "assassinate", "execute", "slaughter", "massacre",
        "genocide", "torture", "beat", "hit", "punch", "kick", "slap", "stab",
        "shoot", "gun", "knife", "weapon", "bomb", "blast", "attack",
        "assault", "fight", "war", "battle", "destroy", "demolish", "burn",
        "fire",
        "marna", "maar dena", "hatya", "qatl", "jaan lena", "khatam karna",
        "peetna", "maarna", "ghoonsa", "laat", "thappad", "chaku", "bandook",
        "hathiyar", "dhamaka", "hamla", "ladai", "jung", "tabah karna",
        "jalana", "aag", "phoonkna", "barbaad karna",
        "marunga", "mardunga", "marduunga", "maar dunga", "maar denge",
        "khatam karunga", "khatam kar dunga", "peet dunga", "peetenge",
        "tod dunga", "tod denge", "jaan se maar dunga", "zinda nahi chodunga",
    ],
}

# Toxicity pattern groups: (group name, alternation of literal terms)
HARM_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("violence", r"\b(kill|die|death|murder|suicide|assassinate|slaughter|massacre|torture|beat|hit|punch|kick|slap|stab|shoot|marjayega|mar ja|khudkhushi|khatam|maar|marna|hatya|qatl|jaan lena|peetna|ghoonsa|laat|thappad|marunga|mardunga|marduunga|maar dunga|khatam karunga|peet dunga|tod dunga)\b"),
    ("hate", r"\b(hate|hatred|despise|loathe|racist|discrimination|bigot|nafrat|ghrina|bura|ganda|jaati|bhed-bhaav|neech|kamina|deshdrohi|gaddaar)\b"),
    ("insult", r"\b(stupid|idiot|moron|dumb|retard|loser|freak|weirdo|bewakoof|pagal|gadha|ullu|nikamma|faltu|bekar|nalayak|kamchor|aalsi|kutta|suar|janwar)\b"),
    ("appearance", r"\b(ugly|disgusting|gross|hideous|fat|skinny|dark|bald|smelly|monster|beast|badsurat|ganda|ghatiya|bekaar|mota|patla|kala|takla|badbu)\b"),
    ("threat", r"\b(threat|threaten|intimidate|scare|blackmail|extort|dhamki|dhamkana|pareshan|tang|zorjabardasti|majboor karna)\b"),
    ("sexual", r"\b(rape|molest|grope|fondle|nude|naked|strip|undress|balatkar|chheda chhedi|nanga|kapde utaro|chhuna|haath lagana)\b"),
    ("profanity", r"\b(fuck|shit|bitch|asshole|bastard|damn|hell|crap|lund|choot|gaand|randi|raand|madarchod|behenchod|chutiya)\b"),
)

# Points per harm-pattern match and for strongly negative sentiment
PATTERN_MATCH_WEIGHT: float = 0.2
NEGATIVE_SENTIMENT_THRESHOLD: float = -0.3
NEGATIVE_SENTIMENT_WEIGHT: float = 0.3

# Sentiment normalisation
SENTIMENT_DIVISOR: float = 10.0
SENTIMENT_LABEL_THRESHOLD: float = 0.1
