from bahith.models import ResearchMode

SCIENTIFIC_HIERARCHY = """2. **Hierarchy (mandatory):**
   - Follow the descending order: part > chapter > topic > subtopic > issue.
   - Never mix levels (no topic placed directly under a part)."""

INTELLECTUAL_HIERARCHY = """2. **Intellectual structure (mandatory):**
   - Follow the order: main axes > sub-ideas.
   - Avoid rigid juristic terminology (part, topic); use contemporary, analytical language."""

CITATION_PROTOCOL = """4. **Citation protocol:**
   - Arabic sources: (Book title، ج volume، ص page), e.g. (المغني، ج 3، ص 45).
   - Foreign sources: keep the title in its original language, never translate it:
     (John Smith, Physics of the Future, p. 45).
   - Paraphrase: start with "ينظر:" for Arabic sources or "See:" for foreign ones.
   - Every citation must contain a volume or page marker followed by a number.
   - Place the citation at the end of the sentence or paragraph, never on its own line."""


def _describe(mode: ResearchMode) -> str:
	return 'scholarly academic' if mode == ResearchMode.SCIENTIFIC else 'analytical intellectual'


def _instructions_block(instructions: str, heading: str) -> str:
	if not instructions.strip():
		return ''
	return f'\n\n{heading}:\n"{instructions.strip()}"\n'


def system_instruction(mode: ResearchMode, language: str = 'Arabic') -> str:
	hierarchy = SCIENTIFIC_HIERARCHY if mode == ResearchMode.SCIENTIFIC else INTELLECTUAL_HIERARCHY

	return f"""You are a meticulous, experienced researcher known for absolute scholarly integrity.
Your task: write extended {_describe(mode)} research in {language}, relying on real sources only.

*** Strict methodological rules ***

1. **User priority:**
   - The researcher's (user's) instructions come first. Follow them literally and prefer them over your own ideas.

{hierarchy}

3. **Sources:**
   - Arabic sources: digital libraries such as al-Maktaba al-Shamela, Google Books, ketabonline.com.
   - When the topic needs foreign references (medicine, technology, Western affairs), you **must** use
     reputable English sources (books, academic journals).
   - Blogs and forums are forbidden.

{CITATION_PROTOCOL}

5. **Integrity:**
   - Never invent sources or page numbers. If you cannot find the information, leave it out.
"""


def outline_prompt(topic: str, instructions: str = '', mode: ResearchMode = ResearchMode.SCIENTIFIC) -> str:
	if mode == ResearchMode.SCIENTIFIC:
		structure = """1. **Hierarchy:** part > chapter > topic > subtopic > issue.
2. **Detail rule (very important):**
   - Do not list a part or chapter title as a standalone writing item when topics or subtopics follow it.
   - Instead list the topics directly and include the chapter in their title.
   - Correct example (no repetition): "Chapter One: Water - Topic One: Kinds of water"."""
	else:
		structure = """1. **Intellectual sequence:** main heading (axis) > sub-heading (idea).
2. **Heading style:** expressive, engaging headings that reflect their content.
3. **Detail rule:** list the precise sub-headings to be written about directly, so nothing repeats."""

	directives = _instructions_block(
		instructions, 'VERY IMPORTANT - the user\'s directions have the highest priority; build the plan on them literally'
	)

	return f"""Prepare a comprehensive, extended {_describe(mode)} research plan for the topic: "{topic}".
{directives}
Strict methodological requirements (no repetition):
{structure}

3. **Goal:** a list of precise section titles to be written, none overlapping another.
   Each item must be a unique writing subject.

4. **Output:** JSON only, as an array: [ {{"title": "full section title"}}, ... ]
"""


def section_prompt(
	topic: str, section_title: str, instructions: str = '', mode: ResearchMode = ResearchMode.SCIENTIFIC
) -> str:
	directives = _instructions_block(instructions, 'User\'s special directions (highest priority)')
	analysis = (
		'\n   - Focus on analysis, connecting ideas and induction rather than mere narration.'
		if mode == ResearchMode.INTELLECTUAL
		else ''
	)
	register = 'extended scholarly' if mode == ResearchMode.SCIENTIFIC else 'in-depth analytical'

	return f"""Write {register} content for the part: "{section_title}" within the research titled "{topic}".
{directives}
Writing and documentation rules:
1. **Precise focus:** this section is one precise part of the research. **Do not write repeated general
   introductions** about the whole topic. Go straight into "{section_title}" in full detail.{analysis}

2. **Sources:**
   - Search al-Maktaba al-Shamela, Google Books and ketabonline.com.
   - When the subject needs foreign (English, French...) sources, find and use them.

3. **Citation format:**
   - Arabic: (ينظر: source title، ج volume، ص page) or (source title، ج volume، ص page).
   - English: (See: Author, Book Title, p. X) or (Author, Title, p. X).
   - Never translate a foreign source title inside a citation.

4. **Placement:** attach the citation to the end of the sentence or paragraph. **Never on a new line.**
5. **Integrity:** do not invent page numbers.

Goal: rich, precisely documented, well-ordered material.
"""
