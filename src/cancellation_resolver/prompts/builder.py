"""Builds the instruction sent to the generative backend."""

RESPONSE_FIELDS = ("service", "cancellation_link", "instructions")


def build_prompt(service_name: str) -> str:
    """Create a prompt asking for a JSON object with exactly three fields.

    The backend has no browsing capability, so the prompt asks for what the
    model already knows and never tells it to look anything up online.

    Raises:
        ValueError: If `service_name` is empty or whitespace.
    """
    if not isinstance(service_name, str) or not service_name.strip():
        raise ValueError("service_name must be a non-empty string")

    fields = ", ".join(f"'{name}'" for name in RESPONSE_FIELDS)
    prompt_parts = [
        f"Service name: {service_name.strip()}.",
        f"Return ONLY a JSON object with exactly three fields: {fields}.",
        "The 'service' field is the service's name.",
        "The 'cancellation_link' field is the official page where users can "
        "cancel their subscription. Prefer a link on the service's own domain "
        "over third-party help sites or articles.",
        "The 'instructions' field briefly describes, in plain sentences, how to "
        "cancel the subscription.",
        "Do not include markdown, code fences, additional fields, or any "
        "commentary outside the JSON object.",
    ]
    return "\n".join(prompt_parts)
