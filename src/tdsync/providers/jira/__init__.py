"""Jira Cloud provider."""

from tdsync.providers.jira.adf import DocNode, adf_to_text, text_to_adf
from tdsync.providers.jira.provider import JiraProvider, parse_jira_time

__all__ = ["DocNode", "JiraProvider", "adf_to_text", "parse_jira_time", "text_to_adf"]
