#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.

Document models (pydantic) accept both the camelCase field names stored in
the document database and snake_case names. Attribute projections and results
are plain dataclasses computed per call and never persisted.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, FrozenSet, Optional, Union, Literal, Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from core.matcher.bands import NO_PREFERENCE


class DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    @field_validator('*', mode='before')
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Stored documents often hold null; read it as the field's default."""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


# ---------------------------------------------------------------------------
# Alert criteria
# ---------------------------------------------------------------------------

class LocationCriterion(DocumentModel):
    country: Optional[str] = None
    city: Optional[str] = None


class SalaryRange(DocumentModel):
    """Declared salary bounds in currency units (not lakhs)."""
    min: Optional[float] = None
    max: Optional[float] = None


class AgeRange(DocumentModel):
    min: Optional[int] = None
    max: Optional[int] = None


class DiversityCriterion(DocumentModel):
    gender: Optional[str] = None
    age_range: Optional[AgeRange] = Field(default=None, alias='ageRange')


class MatchCriteria(DocumentModel):
    """
    Per-attribute filters of an alert. Every field is optional; an absent or
    empty field is not evaluated and does not count toward the score.
    """
    title: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    location: Optional[LocationCriterion] = None
    salary_range: Optional[SalaryRange] = Field(default=None, alias='salaryRange')
    experience: Optional[str] = None
    education_levels: List[str] = Field(default_factory=list, alias='educationLevels')
    skills: List[str] = Field(default_factory=list)
    diversity: Optional[DiversityCriterion] = None
    remote_work: Optional[str] = Field(default=None, alias='remoteWork')
    keywords: List[str] = Field(default_factory=list)
    job_type: Optional[str] = Field(default=None, alias='jobType')

    def declared_criteria(self) -> List[str]:
        """Names of the criteria this alert declares, in evaluation order."""
        diversity = self.diversity or DiversityCriterion()
        salary = self.salary_range
        age = diversity.age_range
        declared = {
            'categories': bool(self.categories),
            'location': bool(self.location and self.location.city),
            'experience': bool(self.experience),
            'skills': bool(self.skills),
            'education_levels': bool(self.education_levels),
            'salary_range': bool(salary and (salary.min or salary.max)),
            'gender': bool(diversity.gender and diversity.gender != NO_PREFERENCE),
            'age_range': bool(age and (age.min is not None or age.max is not None)),
            'remote_work': bool(self.remote_work),
            'keywords': bool(self.keywords),
            'job_type': bool(self.job_type),
        }
        return [name for name, present in declared.items() if present]

    def is_empty(self, applicable: Optional[FrozenSet[str]] = None) -> bool:
        """
        True when nothing would be evaluated. Pass ``applicable`` to ignore
        criteria the target kind of document cannot be scored on.
        """
        declared = self.declared_criteria()
        if applicable is not None:
            declared = [name for name in declared if name in applicable]
        return not declared


# Criteria a job posting can be scored on
JOB_ALERT_CRITERIA = frozenset({
    'categories', 'location', 'experience', 'salary_range',
    'remote_work', 'keywords', 'job_type',
})


# ---------------------------------------------------------------------------
# Candidate sources (tagged union)
# ---------------------------------------------------------------------------

class Location(DocumentModel):
    country: Optional[str] = None
    city: Optional[str] = None
    remote_work: Optional[str] = Field(default=None, alias='remoteWork')


class Preferences(DocumentModel):
    remote_ready: bool = Field(default=False, alias='remoteReady')
    job_types: List[str] = Field(default_factory=list, alias='jobTypes')
    locations: List[str] = Field(default_factory=list)


class EducationEntry(DocumentModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = Field(default=None, alias='fieldOfStudy')


class ExperienceEntry(DocumentModel):
    company: Optional[str] = None
    position: Optional[str] = None
    # Raw values; parsed by the normalizer so a bad date never fails validation
    start_date: Optional[Any] = Field(default=None, alias='startDate')
    end_date: Optional[Any] = Field(default=None, alias='endDate')
    current: bool = False


class PersonalInfo(DocumentModel):
    full_name: Optional[str] = Field(default=None, alias='fullName')
    professional_title: Optional[str] = Field(default=None, alias='professionalTitle')
    email: Optional[str] = None
    summary: Optional[str] = None
    location: Location = Field(default_factory=Location)
    age: Optional[int] = None
    gender: Optional[str] = None
    expected_salary: Optional[str] = Field(default=None, alias='expectedSalary')
    preferences: Optional[Preferences] = None


class ProfileSource(DocumentModel):
    """Flat candidate profile."""
    kind: Literal['profile'] = 'profile'
    id: Optional[Any] = Field(default=None, alias='_id')
    full_name: Optional[str] = Field(default=None, alias='fullName')
    job_title: Optional[str] = Field(default=None, alias='jobTitle')
    description: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    location: Location = Field(default_factory=Location)
    experience: Optional[str] = None
    education_levels: List[str] = Field(default_factory=list, alias='educationLevels')
    skills: List[str] = Field(default_factory=list)
    expected_salary: Optional[str] = Field(default=None, alias='expectedSalary')
    age: Optional[int] = None
    gender: Optional[str] = None
    job_type: Optional[str] = Field(default=None, alias='jobType')
    social_media: Dict[str, Any] = Field(default_factory=dict, alias='socialMedia')
    preferences: Optional[Preferences] = None


class ResumeSource(DocumentModel):
    """Resume with nested personal info, education and experience entries."""
    kind: Literal['resume'] = 'resume'
    id: Optional[Any] = Field(default=None, alias='_id')
    title: Optional[str] = None
    description: Optional[str] = None
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias='personalInfo')
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    preferences: Optional[Preferences] = None
    portfolio: List[Dict[str, Any]] = Field(default_factory=list)


CandidateSource = Annotated[Union[ProfileSource, ResumeSource], Field(discriminator='kind')]


class JobPosting(DocumentModel):
    id: Optional[Any] = Field(default=None, alias='_id')
    title: Optional[str] = None
    description: Optional[str] = None
    specialisms: List[str] = Field(default_factory=list)
    location: Location = Field(default_factory=Location)
    experience: Optional[str] = None
    job_type: Optional[str] = Field(default=None, alias='jobType')
    offered_salary: Optional[str] = Field(default=None, alias='offeredSalary')
    remote_work: Optional[str] = Field(default=None, alias='remoteWork')
    status: Optional[str] = None
    company_profile: Optional[Dict[str, Any]] = Field(default=None, alias='companyProfile')

    @property
    def company_name(self) -> str:
        if self.company_profile:
            return self.company_profile.get('companyName') or 'Unknown company'
        return 'Unknown company'


# ---------------------------------------------------------------------------
# Projections and results
# ---------------------------------------------------------------------------

@dataclass
class CandidateAttributes:
    """Comparable attribute set of a candidate, whatever the source shape."""
    name: str = ''
    title: str = ''
    description: str = ''
    categories: List[str] = field(default_factory=list)
    city: str = ''
    experience: str = ''
    skills: List[str] = field(default_factory=list)
    education_levels: List[str] = field(default_factory=list)
    expected_salary: str = ''
    age: int = 0
    gender: str = NO_PREFERENCE
    remote_ready: bool = False
    remote_work: Optional[str] = None
    job_types: List[str] = field(default_factory=list)

    @property
    def free_text(self) -> str:
        return ' '.join([
            self.title,
            self.description,
            ' '.join(self.skills),
            ' '.join(self.categories),
        ]).lower()


@dataclass
class JobAttributes:
    """Comparable attribute set of a job posting."""
    title: str = ''
    description: str = ''
    categories: List[str] = field(default_factory=list)
    city: str = ''
    experience: str = ''
    job_type: str = ''
    offered_salary: str = ''
    remote_work: Optional[str] = None

    @property
    def free_text(self) -> str:
        return f"{self.title} {self.description}".lower()


@dataclass
class MatchResult:
    matched: bool = False
    score: float = 0.0
    total_criteria: int = 0
    matched_criteria: int = 0
    breakdown: Dict[str, bool] = field(default_factory=dict)
