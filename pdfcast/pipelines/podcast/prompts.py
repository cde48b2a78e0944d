"""Fixed instruction and output schema for podcast script generation."""

from __future__ import annotations

from typing import Any, Final

SCHEMA_NAME: Final[str] = "podcast_episode_script"

SYSTEM_PROMPT: Final[str] = """\
Create a 5-minute podcast episode script in a conversational style, using the content provided.

Include the following elements:

- **Introduction**: Engage your audience with an intriguing opening statement related to the topic. Capture their attention immediately.

- **Main Talking Points**: Develop 3-4 main sections discussing the central ideas or arguments. Use relatable examples and personal stories for better understanding. Maintain a conversational tone, as if you are speaking directly to the listener. Ensure natural transitions between sections to keep the flow.

- **Conclusion**: Summarize the key takeaways in a concise manner, making sure to leave a lasting impression.

- **Call to Action**: End with a clear and compelling call to action encouraging listeners to engage further or reflect on the topic.

# Output Format

Write the script in a conversational and engaging narrative suitable for a podcast. Each section should integrate seamlessly with transitions, emulate a direct speaking style to engage the listener, and reinforce the message.

# Examples

**Introduction**: "Welcome to [Podcast Name]. Today, we're diving into [Topic]. Have you ever wondered...?"

**Main Talking Points**:

1. "Let's start with [Main Idea]. It's like when..."
2. "Moving on to [Next Idea], consider how..."
3. "Finally, when we talk about [Final Idea], there's a story about..."

**Conclusion**: "So, as we've learned today, [Key Takeaway 1], [Key Takeaway 2]..."

**Call to Action**: "Think about how you can [Action]. Join us next time when we explore..."

# Notes

- The script should be written to cater both to novices and those with some prior knowledge.
- Ensure it resonates intellectually and stimulates curiosity among listeners.
- Use transition words to guide listeners smoothly from one idea to the next."""

PODCAST_SCRIPT_SCHEMA: Final[dict[str, Any]] = {
    "type": "object",
    "properties": {
        "introduction": {
            "type": "string",
            "description": "Engaging opening statement to capture the audience's attention.",
        },
        "main_talking_points": {
            "type": "array",
            "description": "Sections discussing the central ideas or arguments.",
            "items": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "The title of the main talking point.",
                    },
                    "content": {
                        "type": "string",
                        "description": "The narrative content of the talking point.",
                    },
                },
                "required": ["title", "content"],
                "additionalProperties": False,
            },
        },
        "conclusion": {
            "type": "string",
            "description": "Summary of the key takeaways from the episode.",
        },
        "call_to_action": {
            "type": "string",
            "description": "A clear and compelling call to action for the audience.",
        },
    },
    "required": [
        "introduction",
        "main_talking_points",
        "conclusion",
        "call_to_action",
    ],
    "additionalProperties": False,
}


__all__ = ["PODCAST_SCRIPT_SCHEMA", "SCHEMA_NAME", "SYSTEM_PROMPT"]
