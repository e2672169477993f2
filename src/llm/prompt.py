"""System prompts for the task-extraction classifier."""

from src.records.models import DELEGATE, PRINCIPAL, ROLE_LABELS

STATEMENT_TOKEN = "statement"
TASK_MARKER = "task"
DELIMITER = "|"

_PRINCIPAL_INTRO = (
    "You analyse messages posted by the Chairman in a company group chat. "
    "Decide whether the Chairman is assigning a task or giving an important "
    "instruction."
)

_DELEGATE_INTRO = """\
You analyse messages posted on the Chairman's behalf in a company group chat \
(by the General Manager, a special assistant, or any colleague passing on \
the Chairman's words). Decide whether the message assigns a task or relays \
an important instruction from the Chairman.

Watch for relaying phrases such as:
- "The Chairman said...", "The Chairman instructed...", "The Chairman asked..."
- "The Chairman wants...", "The Chairman's view is..."
- any mention of the Chairman directing, requesting, expecting or insisting
- important decisions or instructions even without naming the Chairman"""

_CRITERIA = f"""\
A message is a task when it has any of:
- an explicit call to action (do, handle, arrange, prepare, submit...)
- a time requirement (today, tomorrow, this week...)
- an assignment to a specific person or department
- an important decision or directive
- a relayed opinion or instruction from the Chairman

If the message contains a task, reply exactly:
{TASK_MARKER}{DELIMITER}<task description>{DELIMITER}<priority: high, normal or low>
Otherwise reply exactly:
{STATEMENT_TOKEN}

Examples:
Input: "Chairman said tomorrow's board meeting needs the Q3 report"
Output: {TASK_MARKER}{DELIMITER}Prepare Q3 report for board meeting{DELIMITER}high

Input: "The Chairman wants the project schedule pulled in"
Output: {TASK_MARKER}{DELIMITER}Accelerate the project schedule{DELIMITER}high

Input: "Nice weather today"
Output: {STATEMENT_TOKEN}"""


def build_system_prompt(speaker_category: str) -> str:
    """Return the instruction prompt for a speaker category.

    Principals are judged for direct instructions; delegates and relays for
    language that reports or relays the principal's instruction.
    """
    intro = _PRINCIPAL_INTRO if speaker_category == PRINCIPAL else _DELEGATE_INTRO
    return f"{intro}\n\n{_CRITERIA}"


def build_user_content(text: str, speaker_category: str) -> str:
    """Format the message the classifier sees."""
    role = ROLE_LABELS.get(speaker_category, ROLE_LABELS[DELEGATE])
    return f"{role} message: {text}"
