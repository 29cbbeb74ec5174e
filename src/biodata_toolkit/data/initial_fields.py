"""
Module: data.initial_fields

Purpose:
    Built-in biodata field catalogue and the flattening step that turns
    "complex" catalogue entries into single-line Fields.

Key Functions:
    - flatten_fields(): ComplexField list -> Field list
    - initial_fields(): Fresh copy of the default field list

Flattening:
    A complex entry may hold several fields separated by "/", e.g.
    label "Height/Weight" with value "5'6/60 kg". Each slot becomes its
    own Field with id "<entry id>-<slot>". Colons are stripped from
    labels, and slots with neither label nor value are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from biodata_toolkit.core.models import Field, FieldOrigin, InputKind, RawGroup

IDENTITY_FIELD_ID = "name-0"


@dataclass(frozen=True)
class ComplexField:
    """Catalogue entry before flattening."""

    id: str
    label: str
    value: str
    kind: InputKind
    group: RawGroup
    options: Tuple[str, ...] = ()


def flatten_fields(complex_fields: Sequence[ComplexField]) -> List[Field]:
    """
    Split "/"-separated catalogue entries into single-line fields.

    Example:
        >>> flat = flatten_fields([ComplexField(
        ...     "hw", "Height/Weight", "5'6/60 kg", InputKind.TEXT, RawGroup.PERSONAL)])
        >>> [(f.id, f.label, f.value) for f in flat]
        [('hw-0', 'Height', "5'6"), ('hw-1', 'Weight', '60 kg')]
    """
    flat: List[Field] = []
    for cf in complex_fields:
        labels = [s.strip() for s in cf.label.split("/")]
        values = [s.strip() for s in cf.value.split("/")]
        count = max(len(labels), len(values), 1)

        for i in range(count):
            label = labels[i].replace(":", "").strip() if i < len(labels) else ""
            value = values[i] if i < len(values) else ""
            if not (label or value):
                continue
            flat.append(Field(
                id=f"{cf.id}-{i}",
                label=label,
                value=value,
                group=cf.group,
                origin=FieldOrigin.MANDATORY,
                input_kind=cf.kind,
                options=cf.options,
            ))
    return flat


_T, _TA, _D, _TM, _S, _R = (
    InputKind.TEXT, InputKind.TEXTAREA, InputKind.DATE,
    InputKind.TIME, InputKind.SELECT, InputKind.RADIO,
)
_P, _F, _C = RawGroup.PERSONAL, RawGroup.FAMILY, RawGroup.CONTACT


def _cf(id: str, label: str, kind: InputKind, group: RawGroup, *options: str) -> ComplexField:
    return ComplexField(id, label, "", kind, group, tuple(options))


INITIAL_COMPLEX_FIELDS: Tuple[ComplexField, ...] = (
    # Personal
    _cf("name", "Full Name", _T, _P),
    _cf("dob", "Date of Birth", _D, _P),
    _cf("tob", "Time of Birth", _TM, _P),
    _cf("pob", "Place of Birth", _T, _P),
    _cf("gender", "Gender", _R, _P, "Male", "Female", "Transgender", "Other"),
    _cf("marital_status", "Marital Status", _S, _P,
        "Unmarried (Single)", "Divorced", "Widowed", "Divorce Awaiting", "Separated", "Annulled"),
    _cf("religion", "Religion", _S, _P,
        "Hindu", "Muslim", "Christian", "Jewish", "Sikh", "Buddhist", "Jain", "Parsi",
        "Inter-Religion", "Spiritual - No Religious", "No Religion"),
    _cf("caste", "Caste", _T, _P),
    _cf("sub_caste", "Sub Caste", _T, _P),
    _cf("manglik", "Manglik", _R, _P, "Yes", "No", "Partial (Anshik)", "Don't Believe"),
    _cf("rashi", "Rashi", _S, _P,
        "Mesh (Aries)", "Vrishabha (Taurus)", "Mithuna (Gemini)", "Karka (Cancer)",
        "Simha (Leo)", "Kanya (Virgo)", "Tula (Libra)", "Vrischika (Scorpio)",
        "Dhanur (Sagittarius)", "Makara (Capricorn)", "Kumbha (Aquarius)", "Meena (Pisces)"),
    _cf("nakshatra", "Nakshatra", _S, _P,
        "Aswini", "Bharani", "Krittika", "Rohini", "Mrigashirsha", "Ardra", "Punarvasu",
        "Pushya", "Ashlesha", "Magha", "Poorva Phalguni", "Hasta", "Chitra", "Swati",
        "Vishakha", "Anuradha", "Jyeshtha", "Mula", "Poorvashada", "Uthrashada",
        "Shravana", "Dhanishtha", "Shathabhisha", "Poorva Bhadrapada",
        "Uttara Bhadrapada", "Revati"),
    _cf("gotra", "Gotra", _T, _P),
    _cf("complexion", "Complexion", _S, _P, "Very Fair", "Fair", "Medium", "Wheatish", "Brown", "Dark"),
    _cf("body_type", "Body Type", _S, _P, "Slim", "Average", "Fit", "Athletic", "Heavy"),
    _cf("height", "Height", _T, _P),
    _cf("weight", "Weight", _T, _P),
    _cf("blood_group", "Blood Group", _S, _P,
        "A+ve", "A-ve", "B+ve", "B-ve", "AB+ve", "AB-ve", "O+ve", "O-ve"),
    _cf("mother_tongue", "Mother Tongue", _S, _P,
        "Hindi", "Punjabi", "Haryanvi", "Himachali", "Kashmiri", "Sindhi", "Urdu",
        "Marathi", "Gujarati", "Tamil", "Telugu", "Kannada", "Malayalam", "Oriya",
        "Sikkim", "Nepali", "English"),
    _cf("community", "Community", _S, _P,
        "Hindi", "Punjabi", "Sindhi", "Jain", "Rajasthani", "Gujarati", "Bengali",
        "Kannada", "Telugu", "Brij", "Nepali", "English", "Haryanvi", "Pahari", "Marathi"),
    _cf("education", "Education", _T, _P),
    _cf("institution", "Institution Name", _T, _P),
    _cf("occupation", "Occupation", _T, _P),
    _cf("job_place", "Job Place", _T, _P),
    _cf("job_experience", "Job Experience", _T, _P),
    _cf("annual_income", "Annual Income", _T, _P),
    _cf("diet", "Diet", _R, _P, "Vegetarian", "Non-Vegetarian", "Eggetarian", "Vegan"),
    _cf("hobbies", "Hobbies", _T, _P),
    _cf("interests", "Interests", _T, _P),
    _cf("language_known", "Language Known", _T, _P),
    _cf("about_myself", "About Myself", _TA, _P),
    _cf("expectation", "Expectation", _TA, _P),
    # Family
    _cf("grand_father_name", "Grand Father Name", _T, _F),
    _cf("grand_father_occupation", "Grand Father Occupation", _T, _F),
    _cf("grand_mother_name", "Grand Mother Name", _T, _F),
    _cf("grand_mother_occupation", "Grand Mother Occupation", _T, _F),
    _cf("father_name", "Father Name", _T, _F),
    _cf("father_occupation", "Father Occupation", _T, _F),
    _cf("mother_name", "Mother Name", _T, _F),
    _cf("mother_occupation", "Mother Occupation", _T, _F),
    _cf("brothers", "Brothers", _T, _F),
    _cf("sisters", "Sisters", _T, _F),
    _cf("kids", "Kids", _T, _F),
    _cf("relatives", "Relatives", _T, _F),
    _cf("family_language", "Family Language", _T, _F),
    _cf("family_status", "Family Status", _S, _F,
        "Affluent", "Upper Middle Class", "Middle Class", "Lower Middle Class", "Average", "Lower Class"),
    _cf("family_type", "Family Type", _S, _F, "Joint Family", "Nuclear Family", "Separated", "Other"),
    _cf("family_values", "Family Values", _S, _F, "Orthodox", "Conservative", "Moderate", "Liberal"),
    _cf("family_income", "Family Income", _T, _F),
    _cf("family_assets", "Family Assets", _T, _F),
    _cf("about_family", "About Family", _TA, _F),
    # Contact
    _cf("personal_contact", "Personal Contact", _T, _C),
    _cf("contact_persons", "Contact Persons", _S, _C, "Father", "Mother", "Brother", "Sister", "Relative"),
    _cf("email", "E-mail", _T, _C),
    _cf("phone_number", "Phone Number", _T, _C),
    _cf("mobile_number", "Mobile No.", _T, _C),
    _cf("home_town", "Home Town", _T, _C),
    _cf("permanent_address", "Permanent Address", _T, _C),
    _cf("present_address", "Present Address", _T, _C),
    _cf("preferred_contact_time", "Preferred Contact Time", _T, _C),
    _cf("picture_profile", "Picture Profile", _T, _C),
    _cf("notes", "Notes", _TA, _C),
)


def initial_fields() -> List[Field]:
    """Default field list for a new session (all values blank)."""
    return flatten_fields(INITIAL_COMPLEX_FIELDS)
