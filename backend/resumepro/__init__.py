"""ResumePro backend: resume editing, ATS scoring and PDF export API."""
