# -*- coding: utf-8 -*-
"""首次启动写入的模板目录与新项目的起始数据。"""

# (name, color, sort_order)
DEFAULT_WORKSTREAMS = [
    ("Office 365", "#0078d4", 1),
    ("Network", "#38a169", 2),
    ("Cybersecurity", "#e53e3e", 3),
    ("Active Directory", "#805ad5", 4),
    ("Applications", "#dd6b20", 5),
    ("Communications", "#319795", 6),
    ("Human Resources", "#d53f8c", 7),
]

DEFAULT_WORKSTREAM_COLOR = "#718096"

# (id, workstream, name, description, priority, dependencies, sort_order)
DEFAULT_TASK_TEMPLATES = [
    ("O365-001", "Office 365", "Assess email environment", "Document mail servers", "High", "", 1),
    ("O365-002", "Office 365", "Plan migration strategy", "Determine approach", "High", "O365-001", 2),
    ("O365-003", "Office 365", "Configure Exchange Online", "Set up tenant", "High", "O365-002", 3),
    ("O365-004", "Office 365", "Migrate mailboxes", "Execute migration", "High", "O365-003", 4),
    ("O365-005", "Office 365", "Configure Teams/SharePoint", "Set up collaboration", "Medium", "O365-003", 5),
    ("NET-001", "Network", "Network assessment", "Document topology", "High", "", 1),
    ("NET-002", "Network", "Plan integration", "Design architecture", "High", "NET-001", 2),
    ("NET-003", "Network", "Configure VPN", "Site-to-site connectivity", "High", "NET-002", 3),
    ("NET-004", "Network", "IP/DNS planning", "Plan IP scheme", "High", "NET-001", 4),
    ("NET-005", "Network", "Firewall consolidation", "Merge policies", "High", "NET-003", 5),
    ("SEC-001", "Cybersecurity", "Security assessment", "Vulnerability scan", "Critical", "", 1),
    ("SEC-002", "Cybersecurity", "Review policies", "Align security policies", "Critical", "SEC-001", 2),
    ("SEC-003", "Cybersecurity", "Endpoint protection", "Deploy EDR", "Critical", "SEC-001", 3),
    ("SEC-004", "Cybersecurity", "Identity management", "Implement IAM", "High", "SEC-002", 4),
    ("SEC-005", "Cybersecurity", "Security training", "Awareness training", "High", "SEC-002", 5),
    ("SEC-006", "Cybersecurity", "SIEM integration", "Integrate logging", "High", "SEC-001", 6),
    ("SEC-007", "Cybersecurity", "IR plan update", "Update procedures", "Medium", "SEC-002", 7),
    ("SEC-008", "Cybersecurity", "Penetration testing", "Security testing", "Medium", "SEC-003", 8),
    ("SEC-009", "Cybersecurity", "Compliance verification", "Verify compliance", "Medium", "SEC-004", 9),
    ("SEC-010", "Cybersecurity", "Data classification", "Review sensitive data", "High", "SEC-001", 10),
    ("AD-001", "Active Directory", "AD assessment", "Document structure", "High", "", 1),
    ("AD-002", "Active Directory", "Plan integration", "Determine approach", "High", "AD-001", 2),
    ("AD-003", "Active Directory", "Establish trust", "Configure trusts", "High", "AD-002", 3),
    ("AD-004", "Active Directory", "GPO consolidation", "Standardize GPOs", "High", "AD-003", 4),
    ("AD-005", "Active Directory", "User migration", "Migrate objects", "High", "AD-003", 5),
    ("AD-006", "Active Directory", "Service accounts", "Audit accounts", "Medium", "AD-001", 6),
    ("AD-007", "Active Directory", "Azure AD Connect", "Hybrid identity", "High", "AD-003", 7),
    ("APP-001", "Applications", "App inventory", "Document apps", "High", "", 1),
    ("APP-002", "Applications", "App rationalization", "Identify redundant", "High", "APP-001", 2),
    ("APP-003", "Applications", "ERP integration", "Plan ERP merge", "High", "APP-002", 3),
    ("APP-004", "Applications", "Database consolidation", "Plan DB migration", "High", "APP-001", 4),
    ("APP-005", "Applications", "SSO integration", "Configure SSO", "Medium", "AD-003", 5),
    ("COM-001", "Communications", "Phone assessment", "Document systems", "Medium", "", 1),
    ("COM-002", "Communications", "UC planning", "Plan Teams/VoIP", "Medium", "COM-001", 2),
    ("COM-003", "Communications", "Number porting", "Transfer numbers", "Medium", "COM-002", 3),
    ("COM-004", "Communications", "Conference rooms", "Standardize tech", "Low", "COM-002", 4),
    ("HR-001", "Human Resources", "Employee policy review",
     "Review and compare employee handbooks, PTO, benefits, and workplace policies between acquired and parent companies",
     "High", "", 1),
    ("HR-002", "Human Resources", "Policy gap analysis",
     "Identify differences in HR policies including code of conduct, harassment, remote work, and disciplinary procedures",
     "High", "HR-001", 2),
    ("HR-003", "Human Resources", "Unified policy development",
     "Draft consolidated employee policies aligned to parent company standards", "High", "HR-002", 3),
    ("HR-004", "Human Resources", "Master user list compilation",
     "Compile comprehensive list of all employees from acquired company with name, title, department, location, email, and system access",
     "Critical", "", 4),
    ("HR-005", "Human Resources", "User list reconciliation",
     "Cross-reference master user list against AD, O365, application access, and badge systems to identify discrepancies",
     "Critical", "HR-004", 5),
    ("HR-006", "Human Resources", "Org chart alignment",
     "Map acquired company org structure to parent company hierarchy and reporting lines", "High", "HR-004", 6),
    ("HR-007", "Human Resources", "Benefits integration",
     "Plan transition of health insurance, 401k, and other employee benefits to parent company programs",
     "High", "HR-001", 7),
    ("HR-008", "Human Resources", "Payroll system integration",
     "Coordinate payroll system migration and ensure continuity of pay cycles", "High", "HR-004", 8),
    ("HR-009", "Human Resources", "Employee communications plan",
     "Develop communication strategy for policy changes, system migrations, and integration milestones",
     "Medium", "HR-003", 9),
    ("HR-010", "Human Resources", "Onboarding package update",
     "Update new employee onboarding materials to reflect integrated systems, policies, and contacts",
     "Medium", "HR-003", 10),
    ("HR-011", "Human Resources", "Compliance verification",
     "Verify all HR practices meet federal, state, and local employment law requirements post-integration",
     "High", "HR-003", 11),
    ("HR-012", "Human Resources", "Contractor/vendor audit",
     "Identify and document all contractors, temps, and third-party vendors with system access from acquired company",
     "High", "HR-004", 12),
]

# 新项目的起始联系人 (role, company, workstream)
STARTER_CONTACTS = [
    ("IT Director", "Acquired", "Office 365"),
    ("Network Admin", "Acquired", "Network"),
    ("Security Manager", "Acquired", "Cybersecurity"),
    ("IT Director", "Applied", "Office 365"),
    ("CISO", "Applied", "Cybersecurity"),
    ("HR Director", "Acquired", "Human Resources"),
    ("HR Business Partner", "Applied", "Human Resources"),
]

# 新项目的起始风险 (id, description, workstream, likelihood, impact, mitigation)
STARTER_RISKS = [
    ("RISK-001", "Data loss during migration", "Office 365", "Medium", "High", "Comprehensive backup"),
    ("RISK-002", "Network connectivity issues", "Network", "Medium", "High", "Redundant connections"),
    ("RISK-003", "Security vulnerabilities", "Cybersecurity", "High", "High", "Security assessment"),
    ("RISK-004", "Incomplete employee records", "Human Resources", "Medium", "High",
     "Cross-reference multiple systems and conduct manager verification"),
    ("RISK-005", "Policy compliance gaps", "Human Resources", "Medium", "Medium",
     "Legal review of all consolidated policies before rollout"),
]

DEMO_PROJECT = {
    "name": "Demo Integration",
    "description": "Sample project",
    "acquired_company": "Acme Corp",
}
