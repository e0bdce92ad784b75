"""
Companies App - Company Profile and Topups

A company is the tenant of the ledger: it owns members and food
summaries and carries its own running balance. Topups credit the
company balance; bread purchases recorded in food summaries debit it.

Architecture:
- Models: Company, Topup
- Services: company_management, topup_management
- Views: CompanyViewSet (+ topup / topups actions)
"""
