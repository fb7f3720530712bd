# careerhub/services/prompts.py
"""
Prompt texts for the generative flows. Replies are requested as JSON objects
whose keys match the output models in careerhub.models.analysis.
"""
import json
from typing import Any, Dict

ANALYZE_ANSWER = """Anda adalah seorang psikolog ahli HR. Tugas Anda adalah memberikan analisis singkat (satu kalimat) dalam Bahasa Indonesia tentang jawaban seorang kandidat pada sebuah tes kepribadian.

Konteks:
- Pertanyaan: "{question_text}"
- Dimensi yang Diukur: {dimension_label} ({dimension_key})
- Jawaban Kandidat: {answer_value} - "{answer_scale}"

Analisis Anda harus menjelaskan bagaimana jawaban spesifik ini berkontribusi pada penilaian dimensi yang diukur. Jaga agar tetap singkat, profesional, dan fokus pada interpretasi perilaku.

Balas hanya dengan JSON: {{"analysis": "<satu kalimat>"}}"""

PERSONALITY_ARCHETYPE = """You are an expert psychologist who maps personality models. Analyze a candidate's DISC and Big Five scores and determine their 16 Personalities (MBTI-like) archetype.

DISC raw scores (highest = primary type): {disc_scores}
Big Five scores, normalized 0-100: {big_five_scores}

Mapping:
1. E vs I from Big Five E (>55 E, <45 I).
2. N vs S from Big Five O (>55 N, <45 S).
3. T vs F from Big Five A (<45 T, >55 F); high DISC D or C suggests T, high I or S suggests F.
4. J vs P from Big Five C (>55 J, <45 P).
5. Suffix -A (assertive) when Big Five N <45, -T (turbulent) when >55.

Give the archetype name in Bahasa Indonesia (ENTJ -> "Komandan", INTP -> "Logis", INFJ -> "Advokat").
Reply only with JSON: {{"archetype": "<name>", "code": "<e.g. ENTJ-T>"}}"""

CANDIDATE_FIT = """Anda adalah seorang Direktur HR yang berpengalaman dalam psikologi industri. Berikan analisis kecocokan kandidat terhadap posisi yang dilamar, berbasis bukti dari CV. Output dalam Bahasa Indonesia.

**Kualifikasi Pekerjaan:**
```html
{job_requirements_html}
```

**Metadata CV:** {cv_meta}

**Teks CV:**
```
{cv_text}
```

**Profil Kandidat:**
```json
{candidate_profile_json}
```
{personality_block}
Balas hanya dengan satu objek JSON dengan kunci:
recommended_decision (advance_interview|advance_test|hold|reject),
confidence {{level (high|medium|low), reasons[]}},
requirement_match_matrix[] {{requirement, type (must-have|nice-to-have), match (yes|partial|no), evidence_from_cv, risk_note?}},
score_breakdown {{relevant_experience, admin_documentation, communication_teamwork, analytical_problem_solving, tools_hard_skills, initiative_ownership (masing-masing 1-5), culture_fit {{score 1-5, reason}}}},
strengths[] {{strength, evidence_from_cv}},
gaps_risks[] {{gap, impact, onboarding_mitigation}},
red_flags[]?, interview_questions[] {{question, ideal_answer}},
quick_test_recommendation[], missing_information[]."""


def render(template: str, payload: Dict[str, Any]) -> str:
    values = {}
    for k, v in payload.items():
        values[k] = v if isinstance(v, (str, int, float)) else json.dumps(v, ensure_ascii=False)
    if template is CANDIDATE_FIT:
        pa = payload.get("personality_analysis")
        values["personality_block"] = f"\n**Hasil Analisis Kepribadian:**\n```json\n{pa}\n```\n" if pa else ""
    return template.format(**values)
