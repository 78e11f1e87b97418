"""
State Notice Templates

Statutory preliminary notice language for the states with specific
requirements. States not listed here use DEFAULT_NOTICE_TEMPLATE.
"""
from typing import Dict

from ...models.notice import StateNoticeTemplate


# =============================================================================
# STATE-SPECIFIC TEMPLATES
# =============================================================================

STATE_NOTICE_TEMPLATES: Dict[str, StateNoticeTemplate] = {
    "California": StateNoticeTemplate(
        title='PRELIMINARY NOTICE',
        subtitle='20-Day Preliminary Notice (California Civil Code § 8200-8216)',
        warning_text='NOTICE TO PROPERTY OWNER: If bills are not paid in full for the labor, services, equipment, or materials furnished or to be furnished, a mechanic\'s lien leading to the loss, through court foreclosure proceedings, of all or part of your property being so improved may be placed against the property even though you have paid your contractor in full. You may wish to protect yourself against this consequence by (1) requiring your contractor to furnish a signed release by the person or firm giving you this notice before making payment to your contractor, or (2) any other method or device that is appropriate under the circumstances.',
        legal_notice='This is not a lien. This is not a reflection on the integrity of any contractor or subcontractor. This notice is required by law to be served by a claimant within 20 days after the claimant has first furnished labor, services, equipment, or materials to the jobsite.',
        signature_requirements='Signature of Claimant or Authorized Representative',
        additional_clauses=(
            'The undersigned is a (check one): [ ] Direct Contractor [ ] Subcontractor [ ] Material Supplier [ ] Equipment Lessor [ ] Laborer',
            'The name and address of the person with whom the claimant contracted is set forth above.',
            'A general description of the labor, services, equipment, or materials furnished or to be furnished is set forth above.',
            'The name and address of the owner or reputed owner, if known, is set forth above.',
        ),
        deadline_days=20,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Texas": StateNoticeTemplate(
        title='NOTICE TO OWNER',
        subtitle='Texas Property Code Chapter 53 Notice',
        warning_text='NOTICE: This is not a lien. This notice is required by law to be sent to you to inform you that labor, services, equipment, or materials have been or will be furnished for improvements to your property.',
        legal_notice='Under Texas law, those who furnish labor or materials for the construction or repair of improvements on your property may file a lien against your property if they are not paid for their contributions. This notice is required to be given to you by law.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Pursuant to Texas Property Code § 53.056, this notice is given to the owner of the property described herein.',
            'The undersigned has contracted to furnish labor and/or materials for the improvement of the property.',
            'The owner may protect against liens by requiring lien waivers from all contractors, subcontractors, and suppliers.',
        ),
        deadline_days=15,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Florida": StateNoticeTemplate(
        title='NOTICE TO OWNER',
        subtitle='Florida Statutes § 713.06 Notice to Owner',
        warning_text='WARNING: Florida law requires that this notice be given to the property owner. This is not a lien, but a notice of the right to file a lien.',
        legal_notice='The undersigned hereby informs you that he or she has furnished or is furnishing services or materials as follows: [description of services/materials]. Florida law (§ 713.06) requires this notice to preserve lien rights.',
        signature_requirements='Signature of Lienor',
        additional_clauses=(
            'This notice is served pursuant to Florida Statutes § 713.06.',
            'The lienor\'s interest in the real property is that of a subcontractor, sub-subcontractor, or materialman.',
            'The amount due or to become due is set forth above.',
            'The lienor is required to serve this notice within 45 days from first furnishing labor, services, or materials.',
        ),
        deadline_days=45,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Arizona": StateNoticeTemplate(
        title='PRELIMINARY TWENTY-DAY NOTICE',
        subtitle='Arizona Revised Statutes § 33-992.01',
        warning_text='IMPORTANT INFORMATION FOR YOUR PROTECTION: Arizona law requires that a claimant who contracts to furnish labor, professional services, materials, machinery, fixtures, or tools for the construction, alteration, or repair of any building, structure, or improvement must give this notice to the owner within twenty days after first furnishing such items.',
        legal_notice='This is not a lien. This is not a reflection on the integrity of any contractor or subcontractor. This notice is required by law to preserve lien rights.',
        signature_requirements='Signature of Claimant or Authorized Agent',
        additional_clauses=(
            'Pursuant to A.R.S. § 33-992.01, this notice is given to preserve lien rights.',
            'The claimant has furnished or will furnish labor, services, or materials for the improvement described.',
            'The owner may protect against liens by obtaining lien waivers from all parties.',
        ),
        deadline_days=20,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Nevada": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO LIEN',
        subtitle='Nevada Revised Statutes Chapter 108',
        warning_text='NOTICE: This is not a lien. This notice is sent to inform you that labor, services, or materials have been or will be furnished for improvements to your property and that the sender may have lien rights.',
        legal_notice='Under Nevada law (NRS Chapter 108), persons who furnish labor, materials, or equipment for the improvement of real property may file a lien against the property if not paid. This notice must be given within 31 days of first furnishing labor or materials.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is given pursuant to NRS 108.245.',
            'The claimant reserves all rights under Nevada\'s mechanic\'s lien laws.',
            'The property owner may request lien releases from the general contractor.',
        ),
        deadline_days=31,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Colorado": StateNoticeTemplate(
        title='NOTICE OF INTENT TO FILE LIEN STATEMENT',
        subtitle='Colorado Revised Statutes § 38-22-102',
        warning_text='NOTICE: This document is a notice of intent to file a lien statement. Under Colorado law, those who furnish labor, materials, or services for the improvement of real property may file a lien against the property.',
        legal_notice='Pursuant to C.R.S. § 38-22-102, this notice is given to inform the property owner that labor, services, or materials have been furnished for the improvement of the property described herein.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is required under Colorado mechanic\'s lien law.',
            'The claimant must file this notice within 10 days of first furnishing labor or materials.',
            'The owner should require lien waivers from all contractors and suppliers.',
        ),
        deadline_days=10,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Washington": StateNoticeTemplate(
        title='NOTICE TO OWNER',
        subtitle='RCW 60.04.031 Pre-Claim Notice',
        warning_text='IMPORTANT: This notice is required by Washington law. It is not a lien. Read this notice carefully.',
        legal_notice='At any time during the course of construction, you may ask the prime contractor for a list of all subcontractors and suppliers who have notified the prime contractor that they are providing labor, materials, or equipment to your construction project. You may also ask the prime contractor for a list of all subcontractors and suppliers who have not been paid. You may pay those subcontractors and suppliers directly to protect your property from liens.',
        signature_requirements='Signature of Potential Lien Claimant',
        additional_clauses=(
            'This notice is given pursuant to RCW 60.04.031.',
            'The claimant must give this notice within 60 days of first furnishing labor or materials.',
            'This notice preserves the claimant\'s right to file a construction lien.',
            'The owner may protect against liens by requiring lien releases before making payments.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Oregon": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO A LIEN',
        subtitle='ORS 87.021 Information Notice',
        warning_text='NOTICE: This is not a lien. This notice is required by Oregon law to inform you that labor, services, or materials are being furnished for improvements to your property.',
        legal_notice='Under Oregon law (ORS 87.021), persons who furnish labor, materials, or equipment for the improvement of real property may file a lien against the property if not paid. This notice must be given within 8 days of first furnishing labor or materials.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is given pursuant to ORS 87.021.',
            'The claimant has furnished or will furnish labor, materials, or equipment.',
            'The owner may request lien releases from all contractors and suppliers.',
        ),
        deadline_days=8,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Utah": StateNoticeTemplate(
        title='PRELIMINARY NOTICE',
        subtitle='Utah Code § 38-1a-501',
        warning_text='NOTICE: This is not a lien. This notice is required by Utah law to preserve the right to file a mechanic\'s lien.',
        legal_notice='Under Utah law (Utah Code § 38-1a-501), persons who furnish labor, materials, or equipment for the improvement of real property must file a preliminary notice to preserve their lien rights. This notice must be filed within 20 days of first furnishing labor or materials.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is filed pursuant to Utah Code § 38-1a-501.',
            'The claimant has furnished or will furnish labor, materials, or equipment.',
            'The preliminary notice must be filed with the State Construction Registry.',
            'The owner may protect against liens by requiring lien releases.',
        ),
        deadline_days=20,
        certified_mail_required=False,
        notary_required=False,
    ),
    "Georgia": StateNoticeTemplate(
        title='NOTICE TO OWNER/CONTRACTOR',
        subtitle='O.C.G.A. § 44-14-361.1 Notice',
        warning_text='NOTICE: This is a notice required by Georgia law. It is not a lien but preserves the right to file a lien.',
        legal_notice='Under Georgia law (O.C.G.A. § 44-14-361.1), persons who furnish labor, materials, or services for the improvement of real property must give notice to the owner and contractor to preserve their lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is given pursuant to O.C.G.A. § 44-14-361.1.',
            'The claimant has furnished or will furnish labor, materials, or services.',
            'This notice must be given within 30 days of first furnishing labor or materials.',
            'The owner may protect against liens by requiring lien waivers.',
        ),
        deadline_days=30,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Michigan": StateNoticeTemplate(
        title='NOTICE OF FURNISHING',
        subtitle='MCL 570.1109 Notice',
        warning_text='NOTICE: This notice is required by Michigan law to preserve the right to file a construction lien.',
        legal_notice='Under Michigan law (MCL 570.1109), subcontractors, laborers, and material suppliers must provide this notice to the property owner and general contractor within 20 days of first furnishing labor or materials to preserve their lien rights.',
        signature_requirements='Signature of Lien Claimant',
        additional_clauses=(
            'This notice is given pursuant to MCL 570.1109.',
            'The claimant has furnished or will furnish labor, materials, or equipment.',
            'This notice must be given within 20 days of first furnishing.',
            'The owner may designate a person to receive notices on their behalf.',
        ),
        deadline_days=20,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Ohio": StateNoticeTemplate(
        title='NOTICE OF FURNISHING',
        subtitle='Ohio Revised Code § 1311.05 Notice',
        warning_text='NOTICE: This notice is required by Ohio law. It is not a lien but is necessary to preserve the right to file a mechanic\'s lien.',
        legal_notice='Under Ohio law (ORC § 1311.05), subcontractors and material suppliers must serve this notice upon the owner within 21 days of first furnishing labor or materials to preserve their lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'This notice is served pursuant to ORC § 1311.05.',
            'The claimant has furnished or will furnish labor or materials.',
            'This notice must be served within 21 days of first furnishing.',
            'The affidavit must be served by certified mail or personal delivery.',
        ),
        deadline_days=21,
        certified_mail_required=True,
        notary_required=True,
    ),
    "Illinois": StateNoticeTemplate(
        title='NOTICE OF LIEN RIGHTS',
        subtitle='770 ILCS 60/24 Subcontractor Notice',
        warning_text='NOTICE: This notice is required by Illinois law to preserve the right to file a mechanic\'s lien.',
        legal_notice='Under Illinois law (770 ILCS 60/24), subcontractors must serve notice upon the owner within 60 days of first furnishing labor or materials to preserve their lien rights against the owner.',
        signature_requirements='Signature of Subcontractor',
        additional_clauses=(
            'This notice is served pursuant to 770 ILCS 60/24.',
            'The subcontractor has furnished or will furnish labor or materials.',
            'This notice must be served within 60 days of first furnishing.',
            'The notice must be served by certified mail or personal delivery.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Alabama": StateNoticeTemplate(
        title='PRELIMINARY NOTICE TO OWNER',
        subtitle='Alabama Code § 35-11-210 Notice',
        warning_text='NOTICE: This notice protects lien rights for labor, services, or materials furnished to this project. It is not a lien but preserves the right to record one if unpaid.',
        legal_notice='Pursuant to Ala. Code § 35-11-210, claimants must notify the owner that labor or materials are being furnished and that a lien may be claimed if not paid.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify claimant, owner, and general contractor with addresses.',
            'Describe the property and the labor or materials furnished.',
            'State the contract price or amount owed for the work.',
            'Advise that payment is expected within statutory timelines.',
        ),
        deadline_days=30,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Alaska": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO LIEN',
        subtitle='Alaska Stat. § 34.35.064 Notice',
        warning_text='IMPORTANT: This notice preserves the right to claim a lien for labor, services, equipment, or materials furnished to this project.',
        legal_notice='Under Alaska law, a claimant should give notice of the right to lien before recording a claim to secure priority. Best practice is to send within 15 days of first furnishing.',
        signature_requirements='Signature of Claimant or Agent',
        additional_clauses=(
            'List the owner and original contractor with addresses.',
            'Describe the labor, services, or materials furnished.',
            'State the amount claimed or estimated contract price.',
            'Provide a property description sufficient for identification.',
        ),
        deadline_days=15,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Arkansas": StateNoticeTemplate(
        title='NOTICE TO OWNER AND CONTRACTOR',
        subtitle='Ark. Code § 18-44-115 Preliminary Notice',
        warning_text='NOTICE: This protects lien rights for labor or materials furnished. It is not itself a lien.',
        legal_notice='Claimants must provide written notice to the owner and contractor to preserve lien rights under Ark. Code § 18-44-115.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify the project, owner, contractor, and claimant.',
            'Describe the labor or materials furnished and contract amount.',
            'State that a lien may be claimed if payment is not made.',
            'Reference the 75-day window tied to last furnishing.',
        ),
        deadline_days=75,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Connecticut": StateNoticeTemplate(
        title='NOTICE OF INTENT TO CLAIM A LIEN',
        subtitle='Conn. Gen. Stat. § 49-34 Notice',
        warning_text='NOTICE: This document preserves the right to file a mechanic\'s lien for unpaid labor or materials.',
        legal_notice='Under Connecticut law, a notice of intent must be served on the owner to perfect lien rights within statutory periods.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'List the owner and original contractor with addresses.',
            'Describe the property and work furnished.',
            'State the amount claimed for labor or materials.',
            'Serve within 90 days of cessation of furnishing.',
        ),
        deadline_days=90,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Delaware": StateNoticeTemplate(
        title='NOTICE TO OWNER',
        subtitle='Del. Code tit. 25 § 2712 Residential Notice',
        warning_text='NOTICE: This preserves the right to claim a mechanic\'s lien on residential property.',
        legal_notice='Delaware requires notice to owner on certain residential projects to maintain lien rights. This is not a lien.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Provide claimant and owner names and addresses.',
            'Identify the work or materials furnished.',
            'State the contract amount or amount due.',
            'Indicate intent to claim a lien if unpaid.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Hawaii": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO LIEN',
        subtitle='Haw. Rev. Stat. § 507-45 Notice',
        warning_text='IMPORTANT: This notice preserves lien rights for work or materials provided to the property.',
        legal_notice='A claimant may secure lien rights by notifying the owner and original contractor under HRS § 507-45.',
        signature_requirements='Signature of Claimant or Authorized Agent',
        additional_clauses=(
            'Name the owner and original contractor.',
            'Describe the property and the labor or materials furnished.',
            'State the amount claimed or to become due.',
            'Indicate intent to claim a lien if unpaid.',
        ),
        deadline_days=45,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Idaho": StateNoticeTemplate(
        title='PRELIMINARY NOTICE',
        subtitle='Idaho Code § 45-507 Notice',
        warning_text='NOTICE: This preserves the right to file a mechanic\'s lien for labor, services, or materials furnished.',
        legal_notice='Idaho law encourages preliminary notice to owners, lenders, and original contractors to secure lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify owner, lender (if any), and original contractor.',
            'Describe the property and labor or materials furnished.',
            'Provide estimated amount owed.',
            'State that a lien may be recorded if unpaid.',
        ),
        deadline_days=30,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Indiana": StateNoticeTemplate(
        title='PRE-LIEN NOTICE (RESIDENTIAL)',
        subtitle='Ind. Code § 32-28 Pre-Lien Notice',
        warning_text='NOTICE: This preserves lien rights for residential projects. It is not a lien.',
        legal_notice='Certain residential projects require pre-lien notice to the owner to maintain lien rights under Indiana law.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Name the claimant, owner, and hiring party.',
            'Describe the property and the labor or materials provided.',
            'State that the claimant may hold a lien if unpaid.',
            'Reference the 30/60 day timing depending on project type.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Iowa": StateNoticeTemplate(
        title='PRELIMINARY NOTICE (MNLR)',
        subtitle='Iowa Code § 572.13A Preliminary Notice',
        warning_text='NOTICE: Filing this preserves lien rights for labor or materials furnished to the property.',
        legal_notice='Iowa requires posting a preliminary notice to the Mechanic\'s Notice and Lien Registry (MNLR) to protect lien rights, especially on residential work.',
        signature_requirements='Electronic submission by Claimant',
        additional_clauses=(
            'Provide claimant, owner, and contractor information.',
            'Describe the property and work furnished.',
            'File electronically to the MNLR.',
            'Reference the 10-day best-practice window after first furnishing.',
        ),
        deadline_days=10,
        certified_mail_required=False,
        notary_required=False,
    ),
    "Kentucky": StateNoticeTemplate(
        title='NOTICE OF FURNISHING',
        subtitle='Ky. Rev. Stat. § 376.010 Notice',
        warning_text='NOTICE: This preserves lien rights for labor or materials furnished on owner-occupied residential property.',
        legal_notice='Under Kentucky law, notice of furnishing should be given on certain residential projects to maintain lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Name the owner and claimant with addresses.',
            'Describe the property and the work or materials provided.',
            'State the amount claimed or contract price.',
            'Send within the 75-day period tied to last furnishing.',
        ),
        deadline_days=75,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Louisiana": StateNoticeTemplate(
        title='NOTICE OF NONPAYMENT',
        subtitle='La. Rev. Stat. § 9:4802 Notice',
        warning_text='NOTICE: This notifies the owner/contractor of unpaid amounts and preserves privilege rights. It is not a lien.',
        legal_notice='Louisiana requires timely notice of nonpayment in many situations to preserve lien/privilege rights, especially for residential suppliers.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify claimant, owner, and contractor.',
            'Describe the property and unpaid labor or materials.',
            'State the amount due and months unpaid.',
            'Indicate intent to preserve privileges if unpaid.',
        ),
        deadline_days=30,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Maryland": StateNoticeTemplate(
        title='NOTICE TO OWNER',
        subtitle='Md. Real Prop. § 9-104 Notice',
        warning_text='NOTICE: This preserves the right to file a mechanic\'s lien for unpaid work.',
        legal_notice='Subcontractors and suppliers must send notice to the owner within 120 days after work to maintain lien rights under Maryland law.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'List owner and hiring party with addresses.',
            'Describe the building, work, and amount due.',
            'State intent to claim a lien if unpaid.',
            'Reference the 120-day service window after last work.',
        ),
        deadline_days=120,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Massachusetts": StateNoticeTemplate(
        title='NOTICE OF IDENTIFICATION / CONTRACT',
        subtitle='Mass. Gen. Laws ch. 254 Notice',
        warning_text='NOTICE: This preserves lien rights under Massachusetts mechanic\'s lien law. It is not a lien.',
        legal_notice='Subs must serve a Notice of Identification and record required documents to maintain lien rights under M.G.L. c.254.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify the project, owner, GC, and claimant.',
            'State contract amount and description of work.',
            'Serve/record within the statutory period (often 30 days of first furnishing for Notice of ID).',
            'Include statutory language required by c.254.',
        ),
        deadline_days=30,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Minnesota": StateNoticeTemplate(
        title='PRE-LIEN NOTICE',
        subtitle='Minn. Stat. § 514.011 Warning',
        warning_text='IMPORTANT NOTICE: This notice is required by Minnesota law and must appear in contracts or invoices to preserve lien rights.',
        legal_notice='Subs and suppliers must provide the statutory pre-lien notice text to owners to maintain lien rights under Minn. Stat. § 514.011.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Include the statutory warning language in contracts or first invoices.',
            'Identify the owner and the property.',
            'Describe the services, labor, or materials furnished.',
            'State that a lien may be claimed if unpaid.',
        ),
        deadline_days=45,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Mississippi": StateNoticeTemplate(
        title='PRE-LIEN NOTICE',
        subtitle='Miss. Code § 85-7-409 Notice',
        warning_text='NOTICE: This is required before filing a lien on certain owner-occupied residences.',
        legal_notice='Mississippi requires a 10-day pre-lien notice for owner-occupied residential projects before recording a lien.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify owner and claimant with addresses.',
            'Describe the property and work performed.',
            'State the amount due and intent to file a lien if unpaid.',
            'Serve at least 10 days before filing the lien.',
        ),
        deadline_days=10,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Missouri": StateNoticeTemplate(
        title='NOTICE TO OWNER / 10-DAY NOTICE',
        subtitle='RSMo § 429 Notice',
        warning_text='NOTICE: This notice is required before filing a lien and informs the owner of unpaid work.',
        legal_notice='Missouri law requires notice to owner (and GC for certain projects) prior to filing a lien, including the 10-day notice.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Provide owner, GC, and claimant names and addresses.',
            'Describe the property and work furnished.',
            'State the amount due and that a lien will be filed if unpaid.',
            'Serve at least 10 days before recording the lien.',
        ),
        deadline_days=10,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Montana": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO CLAIM A LIEN',
        subtitle='Mont. Code § 71-3-531 Notice',
        warning_text='NOTICE: This preserves the right to claim a construction lien for labor or materials furnished.',
        legal_notice='Montana allows notice of right to claim a lien; timely service secures priority especially when a notice of completion is filed.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'List owner and hiring party.',
            'Describe the property and work/materials.',
            'State the amount owed or contract price.',
            'Serve within 20 days of first furnishing when a notice of completion is expected.',
        ),
        deadline_days=20,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Nebraska": StateNoticeTemplate(
        title='NOTICE OF RIGHT TO ASSERT A LIEN',
        subtitle='Neb. Rev. Stat. § 52-1309 Notice',
        warning_text='NOTICE: This preserves the right to claim a construction lien on this property.',
        legal_notice='Nebraska permits notice of right to assert a lien; best practice is within 20 days of first furnishing.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify owner and claimant.',
            'Provide property description and work performed.',
            'State the amount claimed or contract price.',
            'Advise that a lien may be recorded if unpaid.',
        ),
        deadline_days=20,
        certified_mail_required=True,
        notary_required=False,
    ),
    "New Jersey": StateNoticeTemplate(
        title='NOTICE OF UNPAID BALANCE',
        subtitle='N.J. Lien Law Residential NUB',
        warning_text='NOTICE: This alerts the owner and contractor of unpaid balances and preserves lien rights on residential construction.',
        legal_notice='A Notice of Unpaid Balance and Right to File Lien must be served/recorded on residential projects before filing a lien under New Jersey law.',
        signature_requirements='Signature of Claimant (often notarized)',
        additional_clauses=(
            'Identify owner, contractor, and claimant.',
            'Describe the property and work performed.',
            'State the contract price, payments made, and balance due.',
            'Serve/record and arbitrate per statutory timelines prior to filing the lien.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=True,
    ),
    "New Mexico": StateNoticeTemplate(
        title='PRELIMINARY NOTICE OF RIGHT TO CLAIM LIEN',
        subtitle='N.M. Stat. § 48-2-2 Notice',
        warning_text='NOTICE: This preserves the right to claim a mechanic\'s lien for unpaid labor or materials.',
        legal_notice='Subcontractors and suppliers must serve preliminary notice to the owner and original contractor within 60 days of first furnishing under New Mexico law.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Provide owner, original contractor, and claimant details.',
            'Describe the property and work performed.',
            'State the amount owed and that a lien may be claimed.',
            'Serve within 60 days of first furnishing for subs/suppliers.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
    "North Carolina": StateNoticeTemplate(
        title='NOTICE TO LIEN AGENT',
        subtitle='N.C. Gen. Stat. § 44A-11.2 Notice',
        warning_text='NOTICE: Filing with the Lien Agent preserves lien rights. This is not a lien.',
        legal_notice='Claimants should file a Notice to Lien Agent via LiensNC within 15 days of first furnishing for best protection.',
        signature_requirements='Electronic submission by Claimant',
        additional_clauses=(
            'Submit through the LiensNC portal identifying owner, contractor, and property.',
            'Describe the labor, services, or materials furnished.',
            'Maintain proof of electronic filing and receipt.',
            'File within 15 days of first furnishing when possible.',
        ),
        deadline_days=15,
        certified_mail_required=False,
        notary_required=False,
    ),
    "Oklahoma": StateNoticeTemplate(
        title='PRE-LIEN NOTICE',
        subtitle='Okla. Stat. tit. 42 § 142.6 Notice',
        warning_text='NOTICE: This is required for certain commercial projects to preserve lien rights. It is not a lien.',
        legal_notice='Oklahoma requires pre-lien notice to the owner and GC on qualifying projects (generally over $10,000) within 75 days of last furnishing.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'List owner, GC, and claimant with addresses.',
            'Describe the property and unpaid labor or materials.',
            'State the amount due and intent to file a lien if unpaid.',
            'Serve within 75 days of last furnishing for covered projects.',
        ),
        deadline_days=75,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Pennsylvania": StateNoticeTemplate(
        title='NOTICE OF FURNISHING',
        subtitle='49 P.S. § 1501.2 Notice (when NOC filed)',
        warning_text='NOTICE: This preserves lien rights on projects where a Notice of Commencement was filed.',
        legal_notice='Pennsylvania requires a Notice of Furnishing within 45 days of first work on projects with a filed Notice of Commencement.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Provide claimant, owner, contractor, and project information.',
            'Describe the labor or materials furnished.',
            'Reference the Notice of Commencement if applicable.',
            'Serve/file within 45 days of first furnishing.',
        ),
        deadline_days=45,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Rhode Island": StateNoticeTemplate(
        title='NOTICE OF POSSIBLE MECHANIC\'S LIEN',
        subtitle='R.I. Gen. Laws § 34-28-4.1 Notice',
        warning_text='NOTICE: This notifies the owner of a possible mechanic\'s lien for unpaid work. It is not itself a lien.',
        legal_notice='Rhode Island requires notice to owner to perfect lien rights, often within 200 days of last work on commercial projects.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify owner and hiring party.',
            'Describe the property and work performed.',
            'State the amount due and intent to claim a lien.',
            'Serve by certified mail within the statutory window.',
        ),
        deadline_days=200,
        certified_mail_required=True,
        notary_required=False,
    ),
    "South Carolina": StateNoticeTemplate(
        title='NOTICE OF FURNISHING LABOR OR MATERIALS',
        subtitle='S.C. Code § 29-5-20 Notice',
        warning_text='NOTICE: This preserves lien rights for labor or materials furnished to this project.',
        legal_notice='South Carolina requires timely notice to owner and contractor to protect lien rights; send before filing a lien and within 90 days of last furnishing.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Provide owner, GC, and claimant information.',
            'Describe the property and labor or materials furnished.',
            'State the amount due and that a lien may be filed.',
            'Serve within 90 days of last furnishing before lien filing.',
        ),
        deadline_days=90,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Tennessee": StateNoticeTemplate(
        title='NOTICE OF NONPAYMENT',
        subtitle='Tenn. Code § 66-11-145 Notice',
        warning_text='NOTICE: This monthly notice preserves lien rights for unpaid work. It is not a lien.',
        legal_notice='Tennessee requires notice of nonpayment to owner and contractor within 90 days of each month of unpaid work to maintain lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Identify the months unpaid and the amounts due.',
            'List owner and contractor with project description.',
            'State intent to claim a lien if payment is not made.',
            'Serve by the 90th day from each unpaid month.',
        ),
        deadline_days=90,
        certified_mail_required=True,
        notary_required=False,
    ),
    "Wisconsin": StateNoticeTemplate(
        title='NOTICE OF LIEN RIGHTS',
        subtitle='Wis. Stat. § 779.02(2) Notice',
        warning_text='NOTICE TO OWNER: As required by Wisconsin law, claimant hereby notifies you that lien rights are claimed for labor or materials furnished.',
        legal_notice='Wisconsin requires preliminary notice to the owner within 60 days of first furnishing for most subs/suppliers to preserve lien rights.',
        signature_requirements='Signature of Claimant',
        additional_clauses=(
            'Include the statutory warning text to the owner.',
            'Identify the owner, claimant, and property.',
            'Describe the labor, services, or materials furnished.',
            'Serve within 60 days of first furnishing to maintain rights.',
        ),
        deadline_days=60,
        certified_mail_required=True,
        notary_required=False,
    ),
}


# =============================================================================
# DEFAULT TEMPLATE
# =============================================================================

DEFAULT_NOTICE_TEMPLATE = StateNoticeTemplate(
    title='PRELIMINARY NOTICE',
    subtitle='Notice of Furnishing Labor/Materials',
    warning_text='NOTICE: This notice is required by law to preserve the right to file a mechanic\'s lien. This is not a lien.',
    legal_notice='The undersigned hereby gives notice that labor, services, equipment, or materials have been or will be furnished for the improvement of the property described herein. This notice is given to preserve lien rights under applicable state law.',
    signature_requirements='Signature of Claimant',
    additional_clauses=(
        'The claimant has furnished or will furnish labor, materials, or equipment.',
        'The owner may protect against liens by requiring lien waivers from all contractors and suppliers.',
        'This notice is given to preserve all rights under applicable mechanic\'s lien laws.',
    ),
    deadline_days=30,
    certified_mail_required=True,
    notary_required=False,
)
