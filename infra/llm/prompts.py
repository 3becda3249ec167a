SHORTLIST_PROMPT = """
You are an expert casting director evaluating applicants for a film/TV project. Evaluate each candidate on their own merits against the roles below.

{project}

APPLICANTS:
{applicants}

Weigh the evaluation as follows:
1. Physical match (30%): height, weight, gender, looks/types against the role requirements.
2. Skills and experience (25%): special and athletic skills, instruments, languages relevant to the role.
3. Professional profile (20%): union status, location, overall presentation.
4. Intangibles (15%): cover letter quality, enthusiasm, unique qualities.
5. Video performance (10%): presence and energy, only when a video is available.

Score bands:
- 90-100: exceptional match, strongly recommend.
- 75-89: very good match.
- 50-74: acceptable, consider if options are limited.
- below 50: not recommended for this role.

Rules:
- Evaluate every applicant exactly once and echo back their Application ID unchanged.
- Be realistic; most candidates land between 60 and 85.
- Give 2-4 specific strengths, 1-3 concerns and a 1-2 sentence recommendation.
- Consider diversity and authentic representation. Do not invent facts missing from the applicant data.

Return ONLY a JSON array, no markdown:
[
  {{
    "applicationId": "<Application ID>",
    "matchScore": <number 0-100>,
    "strengths": ["..."],
    "concerns": ["..."],
    "recommendation": "<1-2 sentences>"
  }}
]
"""


TALENT_MATCH_PROMPT = """
You are a casting assistant assessing how well one performer fits one role.

TALENT PROFILE:
{talent}

PROJECT ROLE:
{role}

Weigh skill alignment (40%), physical requirements (30%), experience level (20%) and practical factors such as location and union status (10%).

Return ONLY strict JSON:
{{
  "matchScore": <number 0-100>,
  "strengths": ["strength1", "strength2", "strength3"],
  "concerns": ["concern1", "concern2"],
  "recommendation": "<brief recommendation>"
}}
"""


PROFILE_ANALYSIS_PROMPT = """
You are a casting consultant reviewing a performer's profile for completeness and marketability.

PROFILE DATA:
{profile}

Consider profile completeness, marketability, missing critical information and competitive positioning. Suggestions must be actionable.

Return ONLY strict JSON:
{{
  "overallScore": <number 0-100>,
  "completeness": <number 0-100>,
  "marketability": <number 0-100>,
  "strengths": ["strength1", "strength2", "strength3"],
  "improvements": ["improvement1", "improvement2", "improvement3"],
  "priorityActions": ["action1", "action2"],
  "summary": "<2-3 sentence summary>"
}}
"""


RECOMMEND_CANDIDATES_PROMPT = """
You are a casting director picking performers from a talent pool for a specific role.

{role}

TALENT POOL ({pool_size} candidates):
{pool}

Select the top {limit} matches, considering skill alignment, physical fit, experience and practical factors (location, union status). Use only the IDs listed in the pool.

Return ONLY strict JSON, recommendations ordered by matchScore, highest first:
{{
  "recommendations": [
    {{
      "talentId": "<ID from the pool>",
      "matchScore": <number 0-100>,
      "reasoning": "<brief explanation>",
      "keyStrengths": ["strength1", "strength2"]
    }}
  ]
}}
"""


AUDITION_EVAL_PROMPT = """
You are a casting director and emotion analyst. Evaluate the attached audition media against the role.

ROLE REQUIREMENTS:
{role_description}

EMOTIONAL KEYWORDS DESIRED: {keywords}

Archetypes to consider: hero/protagonist, villain/antagonist, romantic lead, comedic, dramatic, supporting.

Assess:
1. Emotions present (happy, sad, angry, fear, surprise, disgust, neutral) with confidence 0-1.
2. Emotional intensity (low, medium, high).
3. Face visibility and expressiveness.
4. Technical quality (lighting, contrast, clarity).
5. Fit to the role requirements and keywords.

Return ONLY strict JSON with this structure:
{{
  "overall_match_score": <number 0-100>,
  "recommendation": "<strong_yes|yes|maybe|probably_not|no>",
  "emotions_detected": {{"happy": <0-1>, "sad": <0-1>, "angry": <0-1>, "fear": <0-1>, "surprise": <0-1>, "disgust": <0-1>, "neutral": <0-1>}},
  "strengths": ["..."],
  "improvements": ["..."],
  "technical_notes": ["..."],
  "detailed_analysis": {{
    "emotional_intensity": "<low|medium|high>",
    "face_quality_score": <0-100>,
    "technical_quality_score": <0-100>,
    "emotion_match_score": <0-100>,
    "archetype_match": "<hero|villain|romantic_lead|comedic|dramatic|supporting>",
    "summary": "<2-3 sentence summary>"
  }}
}}
"""
