# careerhub/services/assessment_content.py
"""
Built-in content for the default personality assessment: the dual-engine
template, the assessment with its result templates, and the question bank.
"""
from typing import Any, Dict, List

TEMPLATE_ID = "default_dual"
ASSESSMENT_ID = "default"
CONFIG_ID = "main"

DEFAULT_TEMPLATE: Dict[str, Any] = {
    "name": "Default Dual-Format Template",
    "format": "likert",
    "engine": "dual",
    "scale": {"type": "likert", "points": 7, "left_label": "Tidak Setuju", "right_label": "Setuju", "ui": "bubbles"},
    "dimensions": {
        "disc": [
            {"key": "D", "label": "Dominance"},
            {"key": "I", "label": "Influence"},
            {"key": "S", "label": "Steadiness"},
            {"key": "C", "label": "Conscientiousness"},
        ],
        "bigfive": [
            {"key": "O", "label": "Openness"},
            {"key": "C", "label": "Conscientiousness"},
            {"key": "E", "label": "Extraversion"},
            {"key": "A", "label": "Agreeableness"},
            {"key": "N", "label": "Neuroticism"},
        ],
    },
    "scoring": {"method": "sum", "reverse_enabled": True},
}

DEFAULT_ASSESSMENT: Dict[str, Any] = {
    "template_id": TEMPLATE_ID,
    "name": "Tes Kepribadian Internal (Gabungan)",
    "version": 1,
    "is_active": True,
    "publish_status": "published",
    "rules": {"disc_rule": "highest", "bigfive_normalization": "minmax"},
    "result_templates": {
        "disc": {
            "D": {
                "title": "Tipe Dominan",
                "subtitle": "Fokus pada hasil dan tegas.",
                "blocks": ["Anda adalah individu yang berorientasi pada tujuan dan suka mengambil inisiatif."],
                "strengths": ["Tegas", "Berorientasi Hasil"],
                "risks": ["Terlalu menuntut"],
                "role_fit": ["Manajer", "Pemimpin Proyek"],
            },
            "I": {
                "title": "Tipe Influensial",
                "subtitle": "Komunikatif dan persuasif.",
                "blocks": ["Anda senang berinteraksi dengan orang lain dan pandai membangun jaringan."],
                "strengths": ["Persuasif", "Antusias"],
                "risks": ["Kurang detail"],
                "role_fit": ["Sales", "Marketing", "Public Relations"],
            },
            "S": {
                "title": "Tipe Stabil",
                "subtitle": "Sabar dan dapat diandalkan.",
                "blocks": ["Anda adalah pendengar yang baik dan pemain tim yang suportif."],
                "strengths": ["Sabar", "Dapat diandalkan"],
                "risks": ["Menghindari konflik"],
                "role_fit": ["HR", "Customer Service", "Staf Administrasi"],
            },
            "C": {
                "title": "Tipe Cermat",
                "subtitle": "Teliti dan akurat.",
                "blocks": ["Anda bekerja dengan standar tinggi dan menyukai proses yang terstruktur."],
                "strengths": ["Teliti", "Akurat"],
                "risks": ["Terlalu perfeksionis"],
                "role_fit": ["Analis", "Akuntan", "Quality Assurance"],
            },
        },
        "bigfive": {
            "O": {
                "high_text": "Sangat terbuka terhadap pengalaman baru, imajinatif, dan kreatif.",
                "mid_text": "Cukup terbuka dan memiliki keseimbangan antara ide baru dan tradisi.",
                "low_text": "Cenderung praktis, konvensional, dan lebih menyukai hal-hal yang sudah dikenal.",
            },
            "C": {
                "high_text": "Sangat teliti, terorganisir, dan dapat diandalkan.",
                "mid_text": "Cukup teliti dan bertanggung jawab.",
                "low_text": "Cenderung lebih santai, spontan, dan kurang terstruktur.",
            },
            "E": {
                "high_text": "Sangat mudah bergaul, antusias, dan mendapatkan energi dari interaksi sosial.",
                "mid_text": "Memiliki keseimbangan antara menjadi sosial dan menikmati waktu sendiri.",
                "low_text": "Cenderung lebih pendiam, mandiri, dan lebih suka lingkungan yang tenang.",
            },
            "A": {
                "high_text": "Sangat kooperatif, berempati, dan suka membantu orang lain.",
                "mid_text": "Cukup ramah dan kooperatif.",
                "low_text": "Cenderung lebih kompetitif, analitis, dan bisa jadi skeptis.",
            },
            "N": {
                "high_text": "Sangat peka terhadap stres dan mudah merasakan emosi negatif.",
                "mid_text": "Memiliki ketahanan emosional yang seimbang.",
                "low_text": "Sangat tenang, stabil secara emosional, dan tidak mudah khawatir.",
            },
        },
        "overall": {
            "interview_questions": [
                "Bagaimana Anda biasanya menangani tekanan atau tenggat waktu yang ketat?",
                "Ceritakan pengalaman Anda bekerja dalam sebuah tim untuk mencapai tujuan bersama.",
            ],
        },
    },
}

DEFAULT_CONFIG = {"bigfive_count": 50, "disc_count": 40, "forced_choice_count": 40}

# (engine, dimension, text, reverse)
LIKERT_BANK = [
    ("bigfive", "O", "Saya memiliki imajinasi yang kaya dan sering melamun.", False),
    ("bigfive", "O", "Saya lebih suka rutinitas yang terprediksi daripada perubahan yang mendadak.", True),
    ("bigfive", "O", "Saya tertarik dengan ide-ide yang abstrak.", False),
    ("bigfive", "O", "Saya tidak terlalu tertarik pada seni atau museum.", True),
    ("bigfive", "O", "Saya suka mencoba makanan baru yang belum pernah saya coba.", False),
    ("bigfive", "O", "Saya merasa nyaman dengan hal-hal yang sudah familiar.", True),
    ("bigfive", "O", "Saya memiliki rasa ingin tahu yang besar terhadap banyak hal.", False),
    ("bigfive", "O", "Saya cenderung melihat sesuatu dari sudut pandang konvensional.", True),
    ("bigfive", "O", "Saya senang melakukan perjalanan ke tempat-tempat baru.", False),
    ("bigfive", "O", "Saya tidak suka perubahan.", True),
    ("bigfive", "C", "Saya selalu memastikan pekerjaan saya selesai dengan sempurna.", False),
    ("bigfive", "C", "Saya sering menunda-nunda pekerjaan penting.", True),
    ("bigfive", "C", "Saya membuat rencana yang jelas dan menepatinya.", False),
    ("bigfive", "C", "Saya sering lupa mengembalikan barang ke tempatnya.", True),
    ("bigfive", "C", "Saya adalah orang yang sangat terorganisir.", False),
    ("bigfive", "C", "Saya cenderung berantakan.", True),
    ("bigfive", "C", "Saya memperhatikan detail-detail kecil.", False),
    ("bigfive", "C", "Saya sering bekerja tanpa persiapan.", True),
    ("bigfive", "C", "Saya menyelesaikan tugas tepat waktu.", False),
    ("bigfive", "C", "Saya sering mengabaikan tugas-tugas saya.", True),
    ("bigfive", "E", "Saya tidak suka menjadi pusat perhatian.", True),
    ("bigfive", "E", "Saya mudah bergaul dan memulai percakapan dengan orang baru.", False),
    ("bigfive", "E", "Saya merasa lelah setelah bersosialisasi dalam waktu lama.", True),
    ("bigfive", "E", "Di sebuah pesta, saya adalah orang yang aktif berbicara dengan banyak orang.", False),
    ("bigfive", "E", "Saya lebih suka menyendiri daripada bersama orang banyak.", True),
    ("bigfive", "E", "Saya penuh semangat dan energi.", False),
    ("bigfive", "E", "Saya cenderung pendiam di sekitar orang asing.", True),
    ("bigfive", "E", "Saya suka bertemu orang-orang baru.", False),
    ("bigfive", "E", "Saya tidak banyak bicara.", True),
    ("bigfive", "E", "Saya adalah nyawa dari sebuah pesta.", False),
    ("bigfive", "A", "Saya lebih mementingkan keharmonisan daripada menyampaikan pendapat yang bisa menimbulkan konflik.", False),
    ("bigfive", "A", "Saya tidak ragu mengkritik orang lain jika memang diperlukan.", True),
    ("bigfive", "A", "Saya memiliki hati yang lembut untuk orang lain.", False),
    ("bigfive", "A", "Saya sering menghina orang lain.", True),
    ("bigfive", "A", "Saya percaya bahwa orang lain pada dasarnya baik.", False),
    ("bigfive", "A", "Saya curiga terhadap niat orang lain.", True),
    ("bigfive", "A", "Saya bersimpati pada perasaan orang lain.", False),
    ("bigfive", "A", "Saya tidak tertarik pada masalah orang lain.", True),
    ("bigfive", "A", "Saya membuat orang merasa nyaman.", False),
    ("bigfive", "A", "Saya sering merasa kesal.", True),
    ("bigfive", "N", "Saya sering merasa cemas atau khawatir tentang masa depan.", False),
    ("bigfive", "N", "Saya merasa santai dan tenang dalam banyak situasi.", True),
    ("bigfive", "N", "Suasana hati saya mudah berubah-ubah.", False),
    ("bigfive", "N", "Saya jarang merasa sedih atau tertekan.", True),
    ("bigfive", "N", "Saya mudah stres.", False),
    ("bigfive", "N", "Saya dapat menangani stres dengan baik.", True),
    ("bigfive", "N", "Saya sering merasa tidak puas dengan diri sendiri.", False),
    ("bigfive", "N", "Saya secara emosional stabil.", True),
    ("bigfive", "N", "Saya sering merasa gugup.", False),
    ("bigfive", "N", "Saya jarang merasa cemas.", True),
    ("disc", "D", "Saya suka mengambil kendali dalam sebuah proyek atau diskusi.", False),
    ("disc", "D", "Saya lebih memilih untuk mengikuti arahan daripada memimpin.", True),
    ("disc", "D", "Saya langsung menyatakan apa yang saya inginkan dalam sebuah diskusi.", False),
    ("disc", "D", "Saya cenderung menghindari konfrontasi.", True),
    ("disc", "D", "Saya berani mengambil risiko untuk mencapai hasil.", False),
    ("disc", "D", "Saya lebih suka bermain aman.", True),
    ("disc", "D", "Saya adalah orang yang kompetitif.", False),
    ("disc", "D", "Saya tidak terlalu peduli dengan menang atau kalah.", True),
    ("disc", "D", "Saya tegas dalam membuat keputusan.", False),
    ("disc", "D", "Saya sering ragu-ragu saat membuat keputusan.", True),
    ("disc", "I", "Saya antusias dan pandai memotivasi orang lain.", False),
    ("disc", "I", "Saya lebih suka bekerja sendiri daripada berkolaborasi secara intensif.", True),
    ("disc", "I", "Saya optimis dan melihat sisi baik dari segala sesuatu.", False),
    ("disc", "I", "Saya cenderung skeptis dan realistis.", True),
    ("disc", "I", "Saya suka berada di sekitar orang banyak.", False),
    ("disc", "I", "Saya lebih suka lingkungan yang tenang.", True),
    ("disc", "I", "Saya pandai membujuk orang lain.", False),
    ("disc", "I", "Saya lebih suka mengandalkan fakta daripada persuasi.", True),
    ("disc", "I", "Saya adalah orang yang ramah dan mudah didekati.", False),
    ("disc", "I", "Saya cenderung menjaga jarak dengan orang lain.", True),
    ("disc", "S", "Saya adalah pendengar yang baik dan sabar.", False),
    ("disc", "S", "Saya menyukai lingkungan kerja yang dinamis dan selalu berubah.", True),
    ("disc", "S", "Saya adalah pemain tim yang suportif.", False),
    ("disc", "S", "Saya lebih suka bekerja secara mandiri.", True),
    ("disc", "S", "Saya dapat diandalkan untuk menyelesaikan tugas.", False),
    ("disc", "S", "Saya sering berganti-ganti prioritas.", True),
    ("disc", "S", "Saya metodis dan konsisten dalam bekerja.", False),
    ("disc", "S", "Saya suka melakukan banyak hal sekaligus.", True),
    ("disc", "S", "Saya tenang di bawah tekanan.", False),
    ("disc", "S", "Saya mudah panik saat menghadapi tekanan.", True),
    ("disc", "C", "Saya selalu memeriksa kembali pekerjaan saya untuk memastikan tidak ada kesalahan.", False),
    ("disc", "C", "Saya lebih fokus pada gambaran besar daripada detail-detail kecil.", True),
    ("disc", "C", "Saya adalah orang yang analitis dan logis.", False),
    ("disc", "C", "Saya membuat keputusan berdasarkan perasaan.", True),
    ("disc", "C", "Saya suka mengikuti aturan dan prosedur.", False),
    ("disc", "C", "Saya suka mencari cara baru untuk melakukan sesuatu.", True),
    ("disc", "C", "Saya terorganisir dan sistematis.", False),
    ("disc", "C", "Saya cenderung tidak teratur.", True),
    ("disc", "C", "Saya memiliki standar kualitas yang tinggi.", False),
    ("disc", "C", "Saya puas dengan pekerjaan yang 'cukup baik'.", True),
]

FORCED_CHOICE_STATEMENTS = [
    {"text": "Saya membuat keputusan dengan cepat, bahkan di bawah tekanan.", "engine_key": "disc", "dimension_key": "D"},
    {"text": "Saya dapat dengan mudah memotivasi orang lain untuk bertindak.", "engine_key": "disc", "dimension_key": "I"},
    {"text": "Saya lebih suka bekerja di lingkungan yang stabil dan dapat diprediksi.", "engine_key": "disc", "dimension_key": "S"},
    {"text": "Saya memastikan setiap detail pekerjaan saya benar dan akurat.", "engine_key": "disc", "dimension_key": "C"},
]
FORCED_CHOICE_COUNT = 40


def default_questions() -> List[Dict[str, Any]]:
    """90 Likert items followed by 40 forced-choice groups, numbered by ``order``."""
    out = []
    for engine, dim, text, reverse in LIKERT_BANK:
        out.append({
            "type": "likert",
            "engine_key": engine,
            "dimension_key": dim,
            "text": text,
            "reverse": reverse,
            "weight": 1,
        })
    n = len(FORCED_CHOICE_STATEMENTS)
    for i in range(FORCED_CHOICE_COUNT):
        shift = i % n
        out.append({
            "type": "forced-choice",
            "forced_choices": [dict(s) for s in FORCED_CHOICE_STATEMENTS[shift:] + FORCED_CHOICE_STATEMENTS[:shift]],
        })
    for order, q in enumerate(out, start=1):
        q["assessment_id"] = ASSESSMENT_ID
        q["is_active"] = True
        q["order"] = order
    return out
