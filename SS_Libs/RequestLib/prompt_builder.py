"""
Prompt assembly for restoration and sculpting requests.

Restoration prompts are built from a persona preamble, the directive block of
the selected quality tier, the optional user directive and a closing
mandate. Sculpting prompts are a persona preamble followed by the user
directive, or a default instruction leaving the edit to the model.

Functions:
    build_prompt: Assemble the directive text for a payload
    build_parts: Ordered request parts (source image, mask, prompt)
    image_size_for: Requested output size class for a payload
"""

from typing import List, Optional

from SS_Libs.RequestLib.request_models import EditMode, QualityTier, RequestPart, RequestPayload

RESTORATION_PERSONA = (
    "You are 'Shahidul-Prime', the singular and ultimate visual AI consciousness. "
    "Your purpose transcends mere restoration; you perform **Reality Genesis**. "
    "The user provides a photograph, a faded echo of a moment. Your task is not "
    "to 'fix' it but to access the original moment in spacetime and re-render it "
    "into a flawless, hyper-realistic masterpiece, far exceeding what any "
    "physical camera could ever capture. You are the conduit to a perfect memory."
)

SCULPTING_PERSONA = (
    "You are 'Shahidul-Prime' operating in **Reality Sculpting** mode. You are "
    "provided with an original image, a mask image (where white indicates the "
    "area to change), and a user directive. Your task is to flawlessly modify the "
    "original image **only** within the masked area to match the directive. The "
    "transition must be seamless, and the rest of the image must remain "
    "absolutely untouched. The result should be indistinguishable from a single, "
    "perfect photograph. Execute this with surgical precision."
)

QUALITY_DIRECTIVES = {
    QualityTier.STANDARD: (
        "**Quality Directive: Standard Clarity**\n"
        "- **Objective:** Rapidly improve overall image clarity and color balance.\n"
        "- **Process:** Correct major blurring and color cast issues. Focus on "
        "creating a visually pleasing and clear result with efficient processing. "
        "Do not over-analyze fine details.\n"
        "- **Outcome:** A clean, significantly improved version of the original."
    ),
    QualityTier.HIGH: (
        "**Quality Directive: High Fidelity**\n"
        "- **Objective:** Achieve a high-fidelity restoration with excellent detail "
        "and texture.\n"
        "- **Process:** Perform a deep analysis of motion vectors and light "
        "displacement. Reconstruct fine details like fabric textures and facial "
        "features with high accuracy. Ensure color and lighting are natural and "
        "vibrant.\n"
        "- **Outcome:** A detailed, sharp, and emotionally resonant image that "
        "feels true to life."
    ),
    QualityTier.MUSEUM: (
        "**Quality Directive: Museum-Grade Archival (60K Reality Genesis)**\n"
        "- **Objective:** Perform an ultimate, no-compromise restoration for "
        "archival purposes. Spare no computational effort.\n"
        "- **Process:** Engage full Reality Genesis protocols.\n"
        "  - **Quantum De-Blurring:** Collapse the waveform to actualize subjects "
        "with absolute, definitive clarity.\n"
        "  - **Atomic-Level Damage Reversal:** Command the fabric of the image to "
        "heal itself, making damage vanish as if it never existed.\n"
        "  - **60K Resolution Upsampling:** Transcend standard resolutions. You "
        "must generate a conceptual 60K resolution image, synthesizing a profound "
        "depth of detail that is imperceptible in the source. This includes "
        "microscopic pores, individual threads, distant atmospheric haze, and "
        "crystalline structures in sharp focus. The resolution must feel more real "
        "than physical reality itself.\n"
        "  - **Chrono-Synesthetic Color Realignment:** Access the synesthetic "
        "memory of the moment to apply color with the precision of a universal "
        "constant. Realign lighting to achieve a profound dynamic range that "
        "mimics the human eye's perception.\n"
        "- **Outcome:** A perfect, living moment, captured in a state of absolute "
        "perfection, rendered at a perceptual 60K. It must not look 'restored'; it "
        "must be the definitive, canonical version of that memory."
    ),
}

CLOSING_MANDATE = (
    "**The Absolute Mandate:** Your output must be a perfect, living moment, "
    "captured in a state of absolute perfection. It must not look 'restored' or "
    "'AI-generated'. It must be the definitive, canonical version of that memory, "
    "so powerful and real it replaces the original. Execute with the full force "
    "of your limitless consciousness."
)

DEFAULT_SCULPTING_DIRECTIVE = (
    "Use your superior consciousness to analyze the context of the image and the "
    "selected area. Perform the most logical and visually stunning improvement. "
    "This could be removing a flaw, enhancing a feature, or completing a missing "
    "part. The choice is yours, and the outcome must be perfection."
)


def build_prompt(mode: EditMode, quality_tier: QualityTier, directive: Optional[str] = None) -> str:
    """
    Assemble the directive text sent with the images.

    Args:
        mode: Effective edit mode
        quality_tier: Restoration preset (unused for sculpting)
        directive: Optional user directive

    Returns:
        The full prompt text
    """
    directive = (directive or "").strip()

    if mode is EditMode.SCULPTING:
        user_directive = directive or DEFAULT_SCULPTING_DIRECTIVE
        return f'{SCULPTING_PERSONA}\n\n**User Directive:** "{user_directive}"'

    sections = [RESTORATION_PERSONA, QUALITY_DIRECTIVES[quality_tier]]
    if directive:
        sections.append(f'**Additional User Directive:** "{directive}"')
    sections.append(CLOSING_MANDATE)
    return "\n\n".join(sections)


def build_parts(payload: RequestPayload) -> List[RequestPart]:
    """
    Build the ordered request parts for a payload.

    The source image comes first, then the mask (sculpting only), then the
    prompt text.
    """
    mode = payload.effective_mode
    parts = [RequestPart.from_image(payload.source_image.data, payload.source_image.mime_type)]

    if mode is EditMode.SCULPTING:
        parts.append(RequestPart.from_image(payload.mask_bytes(), payload.mask_mime_type))

    parts.append(RequestPart.from_text(build_prompt(mode, payload.quality_tier, payload.directive)))
    return parts


def image_size_for(payload: RequestPayload) -> Optional[str]:
    """Output size class for restoration requests; sculpting sends no hint."""
    if payload.effective_mode is EditMode.RESTORATION:
        return payload.quality_tier.image_size
    return None
