import pytest

from painguide.config import settings
from painguide.content import images
from painguide.content.illustrations import EXERCISE_IMAGES, find_exercise_image
from painguide.content.images import (
    add_anatomical_image,
    add_exercise_images,
    annotate_images,
    match_exercise_line,
)


MONOGRAPH = """# Section 1: Understanding Sciatica

Sciatica is irritation of a nerve root.

## What Is the Sciatic Nerve

The longest nerve in the body.

## Section 7: Movement Plan

- **Bird Dog**: hold for 10 seconds
- **Unlisted Move**: do something
1. **Pelvic Tilt** gently

## Section 8: Safety

- **Bridges**: not in the exercise section
"""


def test_bird_dog_image_follows_its_line():
    annotated = annotate_images(MONOGRAPH, "sciatica", "monograph")
    lines = annotated.split("\n")
    index = lines.index("- **Bird Dog**: hold for 10 seconds")

    assert lines[index + 1] == ""
    assert lines[index + 2] == (
        f"![Bird Dog]({settings.exercise_image_base}/Bird_Dog_Exercise_82325.png)"
    )


def test_exercise_pass_stays_inside_movement_section():
    annotated = add_exercise_images(MONOGRAPH, base_url="https://img.test/ex")

    assert "![Pelvic Tilt](https://img.test/ex/Pelvic_Tilt.png)" in annotated
    assert "Bridges_Pose.png" not in annotated
    assert "Unlisted Move](" not in annotated


def test_filenames_are_url_quoted():
    annotated = add_exercise_images("## Exercise\n\n- **Hip Hinge**: slow", base_url="https://img.test")

    assert "https://img.test/Hip%20Hinge%20With%20Dowel%20Updated.png" in annotated


def test_only_one_anatomical_image_per_document():
    annotated = add_anatomical_image(MONOGRAPH, "sciatica", base_url="https://img.test/anat")

    assert annotated.count("![Anatomical diagram]") == 1
    head, _, tail = annotated.partition("## What Is the Sciatic Nerve")
    assert "![Anatomical diagram](https://img.test/anat/Disc%20Bulge%20and%20Protrusion.png)" in head
    assert "Anatomical diagram" not in tail


def test_week_headings_do_not_get_the_diagram():
    markdown = "## Section 1 Week Plan\n\nDo things.\n\n## Anatomy\n\nBones."

    annotated = add_anatomical_image(markdown, "facet_arthropathy", base_url="https://img.test")

    assert annotated.index("Facet_Joint.png") > annotated.index("## Anatomy")


def test_condition_without_diagrams_is_unchanged():
    assert add_anatomical_image(MONOGRAPH, "muscular_nslbp") == MONOGRAPH


@pytest.mark.parametrize("tier", ["free", "enhanced"])
def test_other_tiers_pass_through(tier):
    assert annotate_images(MONOGRAPH, "sciatica", tier) == MONOGRAPH


@pytest.mark.parametrize("markdown", ["", "no headings at all", "###\n-**\n1.", "\x00\n##"])
def test_malformed_markdown_is_returned_unchanged(markdown):
    assert annotate_images(markdown, "sciatica", "monograph") == markdown


def test_failures_fall_back_to_original(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("lookup table unavailable")

    monkeypatch.setattr(images, "add_exercise_images", boom)

    assert annotate_images(MONOGRAPH, "sciatica", "monograph") == MONOGRAPH


def test_match_exercise_line_patterns():
    assert match_exercise_line("- **Cat-Cow**: slow") == "Cat-Cow"
    assert match_exercise_line("**Dead Bug**: alternate") == "Dead Bug"
    assert match_exercise_line("2. Wall Sits: hold") == "Wall Sits"
    assert match_exercise_line("plain sentence") is None


def test_lookup_precedence_and_declaration_order():
    assert find_exercise_image("BirdDog") == "Birddog_pose.png"
    assert find_exercise_image("bird dog") == "Bird_Dog_Exercise_82325.png"
    # substring hits resolve to the first matching entry in the table
    assert find_exercise_image("Modified Knee to Chest Hold") == EXERCISE_IMAGES["Knee to Chest"]
    assert find_exercise_image("   ") is None
