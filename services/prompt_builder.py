"""All prompt templates for Gemini API calls."""

import json


def build_cleanup_prompt(resume_text: str) -> str:
    """Reformat raw PDF text: whole-line bullets, fixed spacing, tidy sections."""
    return f"""Fix this resume text with strict requirements:

SECTION IDENTIFICATION:
- Lines such as "Description", "Experience", "Projects" are section headers
- ALL lines in a Description section must start with a bullet point

1. BULLET POINTS (•, *, -):
   - NEVER split a bullet point across lines
   - Combine bullet fragments into complete single-line bullets
   - Preserve the original bullet character
   - If a bullet point is missing its bullet character, add one at the start of the line

2. LINE BREAKS:
   - Remove ALL mid-sentence line breaks
   - Keep exactly one line break between distinct bullet points
   - Keep exactly one blank line between sections

3. SPACING:
   - Add missing spaces between words ("ImplementedAES-200" -> "Implemented AES-200")
   - Add a space wherever a lowercase letter is immediately followed by an uppercase letter
   - Never modify technical terms ("RESTful", "CRUD"), proper nouns ("GLibC", "PBKDF2"),
     numbers or dates ("2000+", "2023-2024") or project names

4. SPECIAL CASES:
   - Preserve hyphenated terms as-is ("end-to-end")
   - Keep acronyms intact ("APIs", not "A P Is")
   - Keep company and product names exactly ("Intel/Mobileye")

REQUIRED OUTPUT FORMAT:
- Each bullet point on exactly one line
- No trailing spaces
- No empty lines between bullets
- Exactly one blank line between sections

Examples:
- "VSCodeand" becomes "VSCode and"
- "developingcross-platform" becomes "developing cross-platform"
- "Serverusing" becomes "Server using"

Text to fix:
---
{resume_text}
---

Return only the corrected text, no additional commentary."""


def build_extraction_prompt(resume_text: str, extracted_links: list[str]) -> str:
    """Structured field extraction. URLs must come from the supplied links."""
    return f"""Analyze this resume text and the array of links extracted from the PDF, and extract:
1. Full name
2. Email address
3. Technical skills and technologies, taken from the skills section only (empty list if there is none)
4. The primary domain/field, judged from the skill set (e.g. Frontend Development, Cybersecurity, Backend Development, DevOps, Data Science)
5. Graduation year (YYYY)
6. Notable achievements, from the achievements section only, without dates
7. Work experiences from the experience section (company, role, description, start date, end date, whether current)
8. Certifications from the certifications section (name, issuing organization)
9. Projects from the projects section (name, description, link if present)
10. GitHub profile URL, chosen from the extracted links only, never guessed
11. LinkedIn profile URL, chosen from the extracted links only, never guessed

Resume text:
---
{resume_text}
---

Extracted links:
{json.dumps(extracted_links)}

Respond with ONLY a raw JSON object (no markdown, no code fences) with exactly these keys:
{{
  "name": "full name",
  "email": "email address",
  "skills": ["skill1", "skill2"],
  "domain": "domain name",
  "graduation_year": <YYYY or null>,
  "achievements": ["achievement1", "achievement2"],
  "experiences": [
    {{
      "company": "company name",
      "role": "job title",
      "description": "job description",
      "start_date": "YYYY-MM-DD",
      "end_date": "YYYY-MM-DD or null",
      "is_current": <true|false>
    }}
  ],
  "certifications": [
    {{
      "name": "certification name",
      "issuing_organization": "issuing organization"
    }}
  ],
  "projects": [
    {{
      "name": "project name",
      "description": "project description",
      "link": "project link or null"
    }}
  ],
  "github_url": "github profile url or null",
  "linkedin_url": "linkedin profile url or null"
}}"""
