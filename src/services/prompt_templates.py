"""
Prompt templates for describing webhook events
"""

import json
from typing import Any, Sequence


def format_context_chain(context_chain: Sequence[Any]) -> str:
    """Render a context chain for inclusion in a prompt"""
    return json.dumps(list(context_chain), default=str)


def github_webhook_event_description_template(context_chain: str) -> str:
    """Prompt asking for a casual narration of the latest webhook event"""
    return f"""Infer the following GitHub webhook event data of the activity that is happening in the repository rather than the event itself from the context chain:

    {context_chain}

    When explaining the event, use the most recent Github webhook event data and ignore the rest.
    Do not explain how Github works or what a webhook is.
    Focus only on meaningful fields that indicate what action happened.
    Do not describe the repository itself and its metadata.
    Narrate it to a casual person who is not familiar with Github.
    Ignore unnecessary metadata or empty fields.
    """


def describe_event_prompt(context_chain: str, extra_instruction: str = "") -> str:
    """Event description prompt with the configured extra instruction appended"""
    prompt = github_webhook_event_description_template(context_chain)
    if extra_instruction:
        prompt += f"{extra_instruction}\n"
    return prompt
