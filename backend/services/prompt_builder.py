"""Prompt template for the Gemini-backed AI analysis."""

import json


def build_analysis_prompt(
    job_description: str,
    resume_text: str,
    cover_letter_text: str = "",
    analysis_options: dict | None = None,
) -> str:
    """Ask for the same score set the AI analysis service returns.

    Keys mirror AIAnalysisResult so the response validates directly.
    """
    cover_letter_block = cover_letter_text.strip() or "(no cover letter provided)"
    options_block = ""
    if analysis_options:
        options_block = f"\nANALYSIS OPTIONS: {json.dumps(analysis_options, sort_keys=True)}\n"

    return f"""You are an expert recruiter and ATS (Applicant Tracking System) analyst.

Evaluate how well this job application (resume and cover letter) matches the job description.

SCORING RUBRIC (all scores are integers 0-100):
- 0-40:  Poor match. Major gaps in core requirements.
- 40-55: Weak match. Some transferable skills.
- 55-70: Fair match. Meets several key requirements.
- 70-85: Good match. Meets most requirements with minor gaps.
- 85-100: Excellent match. Meets or exceeds nearly all requirements.
{options_block}
JOB DESCRIPTION:
---
{job_description}
---

RESUME:
---
{resume_text}
---

COVER LETTER:
---
{cover_letter_block}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "overall_score": <integer 0-100>,
  "ats_score": <integer 0-100, how cleanly an ATS would parse the resume>,
  "resume_match_score": <integer 0-100>,
  "cover_letter_match_score": <integer 0-100, 0 if no cover letter>,
  "interview_probability": <integer 0-100>,
  "job_securing_probability": <integer 0-100>,
  "goodness_of_fit_score": <integer 0-100>,
  "ai_recommendation": "<one of: excellent_match, good_match, fair_match, poor_match, not_recommended>",
  "ai_confidence_level": <integer 0-100, how confident you are in this assessment>,
  "section_scores": {{
    "contact_info": <0-100>, "summary": <0-100>, "experience": <0-100>,
    "education": <0-100>, "skills": <0-100>, "achievements": <0-100>
  }},
  "keyword_analysis": {{
    "matching_keywords": [<JD keywords present in the application>],
    "missing_keywords": [<important JD keywords absent from the application>],
    "suggested_keywords": [<up to 10 keywords worth adding>]
  }},
  "skill_match_analysis": {{"matched": [<skills>], "missing": [<skills>]}},
  "experience_gap_analysis": {{"summary": "<one sentence>"}},
  "education_match_analysis": {{"summary": "<one sentence>"}},
  "recommendations": [
    {{"type": "<resume | cover_letter | general>", "text": "<specific, actionable advice>"}}
  ]
}}"""
