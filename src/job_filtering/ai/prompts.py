"""Prompt templates for AI relevance scoring."""

from job_filtering.filters.models import FilterSet, JobPosting

SYSTEM_PROMPT = (
    "You are an expert job filtering AI that understands job descriptions contextually "
    "and provides intelligent, flexible matching."
)


class RelevancePrompts:
    """Prompt templates for scoring jobs against candidate preferences."""

    @staticmethod
    def format_job(job: JobPosting) -> str:
        """
        Format job details for prompts.

        Args:
            job: Job posting.

        Returns:
            Markdown list of job fields.
        """
        posted = job.posted_date.date().isoformat() if job.posted_date else "Not specified"
        lines = [
            f"- Title: {job.title}",
            f"- Company: {job.company}",
            f"- Location: {job.location or 'Not specified'}",
            f"- Employment Type: {job.employment_type or 'Not specified'}",
            f"- Experience Level: {job.experience_level or 'Not specified'}",
            f"- Posted Date: {posted}",
        ]
        if job.skills:
            lines.append(f"- Skills: {', '.join(job.skills)}")
        lines.append(f"- Description: {job.description}")
        return "\n".join(lines)

    @staticmethod
    def format_preferences(filters: FilterSet) -> str:
        """Format the candidate's soft preferences for prompts."""
        return "\n".join(
            [
                f"- City: {filters.city or 'Any'}",
                f"- Career Level: {filters.career_level or 'Any'}",
                f"- Job Category: {filters.job_category or 'Any'}",
                f"- Date Posted: {filters.date_posted or 'Any'}",
                f"- Search Query: {filters.search_query or 'None'}",
            ]
        )

    @staticmethod
    def score_job(job: JobPosting, filters: FilterSet) -> str:
        """
        Build the relevance scoring prompt.

        The job has already passed the candidate's hard filters, so only soft
        preferences are sent.

        Args:
            job: Job posting to score.
            filters: Candidate filters.

        Returns:
            Prompt string asking for a JSON verdict.
        """
        return f"""You are an intelligent job filtering AI. This job has already passed strict hard filter requirements.
Now analyze how well it matches the user's soft preferences, being contextually intelligent about missing metadata.

JOB DETAILS:
{RelevancePrompts.format_job(job)}

USER SOFT PREFERENCES (can be intelligently expanded):
{RelevancePrompts.format_preferences(filters)}

ANALYSIS INSTRUCTIONS:
1. Be contextually intelligent about missing or incomplete metadata
2. Infer job characteristics from description content when metadata is missing
3. Consider synonyms, variations, and industry terminology
4. Score from 0-100 where:
   - 90-100: Perfect match
   - 70-89: Very good match with minor variations
   - 50-69: Good match but some differences
   - 30-49: Partial match, some relevant aspects
   - 0-29: Poor match

Respond in JSON format only:
{{
  "score": 85,
  "matchReasons": ["Specific reasons why this job matches the filters"],
  "flaggedIssues": ["Any concerns or mismatches, if any"],
  "isRecommended": true
}}
"""
