"""Static lookup tables for the medical illustrations served alongside guides.

Exercise names are listed with their known synonyms; declaration order is the
tie-break when more than one name matches a substring lookup.
"""

from __future__ import annotations

from typing import Dict, List

EXERCISE_IMAGES: Dict[str, str] = {
    "Knee to Chest": "Knee_to_chest_stretch.png",
    "Single Knee to Chest": "Knee_to_chest_stretch.png",
    "Double Knee to Chest": "Knee_to_chest_stretch.png",
    "Bridges": "Bridges_Pose.png",
    "Bridge": "Bridges_Pose.png",
    "Glute Bridge": "Bridges_Pose.png",
    "Bridges (if no worsening)": "Bridges_Pose.png",
    "Wall Sits": "Wall_Sits_or_Wall_Squats_82425.png",
    "Wall Sit": "Wall_Sits_or_Wall_Squats_82425.png",
    "Wall Squats": "Wall_Sits_or_Wall_Squats_82425.png",
    "Partial Wall Squats": "Wall_Sits_or_Wall_Squats_82425.png",
    "Wall Sits/Squats": "Wall_Sits_or_Wall_Squats_82425.png",
    "Step-Ups": "Step_Ups.png",
    "Step Up": "Step_Ups.png",
    "Step Ups": "Step_Ups.png",
    "Cat-Cow": "Cat_Camel_Stretch.png",
    "Cat Camel": "Cat_Camel_Stretch.png",
    "Cat-Camel": "Cat_Camel_Stretch.png",
    "Bird Dog": "Bird_Dog_Exercise_82325.png",
    "Bird-Dog": "Bird_Dog_Exercise_82325.png",
    "BirdDog": "Birddog_pose.png",
    "Pelvic Tilt": "Pelvic_Tilt.png",
    "Pelvic Tilts": "Pelvic_Tilt.png",
    "Dead Bug": "Dead_Bug_Pose.png",
    "Dead Bugs": "Dead_Bug_Pose.png",
    "Hip Flexor Stretch": "advanced seated hip flexor stretch.png",
    "Seated Hip Flexor Stretch": "advanced seated hip flexor stretch.png",
    "Advanced Hip Flexor Stretch": "advanced seated hip flexor stretch.png",
    "Standing Hip Flexion": "Standing_Hip_Flexion.png",
    "Standing Back Extension": "Standing_Back_Extension.png",
    "Prone Press": "Prone_Press_Ups.png",
    "Prone Press-Up": "Prone_Press_Ups.png",
    "Prone Press-Ups": "Prone_Press_Ups.png",
    "Prone Press-Ups (Modified McKenzie)": "Prone_Press_Ups.png",
    "Child's Pose": "Childs_Pose.png",
    "Childs Pose": "Childs_Pose.png",
    "Child's Pose Stretch": "Childs_Pose.png",
    "Single Knee-to-Chest": "Knee_to_chest_stretch.png",
    "Single Knee-to-Chest Stretch": "Knee_to_chest_stretch.png",
    "Clamshell": "Clamshell.png",
    "Clamshells": "Clamshell.png",
    "Glute Squeeze": "Glute Squeeze.png",
    "Gluteal Squeeze": "Glute Squeeze.png",
    "Hip Hinge": "Hip Hinge With Dowel Updated.png",
    "Hip Hinge with Dowel": "Hip Hinge With Dowel Updated.png",
    "Modified Row": "Modified Seated Row.png",
    "Modified Seated Row": "Modified Seated Row.png",
    "Partial Squats": "Partial_Squats.png",
    "Partial Squat": "Partial_Squats.png",
    "Squats": "Partial_Squats.png",
    "Squat": "Partial_Squats.png",
    "Prone Lying": "Prone_Lying.png",
    "Prone Position": "Prone_Lying.png",
    "Seated Sciatic Nerve Glides": "Seated_Leg_Extension.png",
    "Sciatic Nerve Glides": "Seated_Leg_Extension.png",
    "Sit-to-Stand Drills": "Sit to Stand Drills.png",
    "Sit-to-Stand": "Sit to Stand Drills.png",
    "Unilateral Carries": "Unilateral Carries.png",
    "Unilateral Carry": "Unilateral Carries.png",
    "Seated Leg Extension": "Seated_Leg_Extension.png",
    "Leg Extension": "Seated_Leg_Extension.png",
    "Seated Lumbar Flexion": "Seated_Lumbar_Flexion.png",
    "Lumbar Flexion": "Seated_Lumbar_Flexion.png",
    "Seated Row": "Seated_Rows.png",
    "Seated Rows": "Seated_Rows.png",
    "Sciatic Nerve Glide": "Seated_Leg_Extension.png",
    "Sciatic Nerve Stretch": "Seated_Leg_Extension.png",
    "Nerve Glide": "Seated_Leg_Extension.png",
    "Side-Lying Hip Abduction": "Side Lying Hip Abduction.png",
    "Hip Abduction": "Side Lying Hip Abduction.png",
    "Single Leg Stand": "Standing_Hip_Flexion.png",
    "Single Leg Stance": "Standing_Hip_Flexion.png",
    "Single-Leg Stand": "Standing_Hip_Flexion.png",
    "Single leg stands": "Standing_Hip_Flexion.png",
    "Standing Balance": "Standing_Hip_Flexion.png",
    "Abdominal Bracing": "Supine_Abdominal_Bracing.png",
    "Core Bracing": "Supine_Abdominal_Bracing.png",
    "Supine Abdominal Bracing": "Supine_Abdominal_Bracing.png",
    "Knee Rocks": "Knee_Rocks.png",
    "Knee Rock": "Knee_Rocks.png",
    "Full Planks": "Full_Planks.png",
    "Full Plank": "Full_Planks.png",
    "Plank Progression": "Full_Planks.png",
    "Modified Plank": "Modified Plank Updated.png",
    "Transverse Abdominis Activation": "Transverse Abdominis.png",
    "Transverse Abdominis": "Transverse Abdominis.png",
    "Dead Bug Prep": "Dead Bug Prep.png",
    "Side-Lying Leg Lifts": "Side Lying Leg Lifts.png",
    "Side Lying Leg Lifts": "Side Lying Leg Lifts.png",
}

ANATOMICAL_IMAGES: Dict[str, List[str]] = {
    "sciatica": ["Disc Bulge and Protrusion.png", "spine drawing with cord and nerves.png"],
    "central_disc_bulge": ["Disc Bulge and Protrusion.png", "spine drawing with labels.jpg"],
    "canal_stenosis": ["spine drawing with cord and nerves.png", "spine drawing with labels.jpg"],
    "lumbar_instability": [
        "Drawing of listhesis and pars defect.png",
        "listhesis and pars defect detailed.jpg",
    ],
    "si_joint_dysfunction": ["Pelvis and SI joint.jpg"],
    "facet_arthropathy": ["Facet_Joint.png"],
    "muscular_nslbp": [],
    "upper_lumbar_radiculopathy": ["spine drawing with cord and nerves.png"],
    "urgent_symptoms": [],
}


def find_exercise_image(name: str, table: Dict[str, str] = EXERCISE_IMAGES) -> str | None:
    """Look up an exercise: exact, then case-insensitive, then substring."""
    normalized = name.strip()
    if not normalized:
        return None
    if normalized in table:
        return table[normalized]
    lowered = normalized.lower()
    for key, filename in table.items():
        if key.lower() == lowered:
            return filename
    for key, filename in table.items():
        key_lower = key.lower()
        if key_lower in lowered or lowered in key_lower:
            return filename
    return None


def anatomical_images_for(condition: str) -> List[str]:
    return list(ANATOMICAL_IMAGES.get(condition, []))
