# ==============================================
# Region Vocabulary
# ==============================================
#
# Canonical state / union-territory names, the spellings seen in
# enrolment exports that map onto them, and the watch-list of states
# with an international land border.
#
# ==============================================

ALL_STATES = (
    "Andaman and Nicobar Islands",
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chandigarh",
    "Chhattisgarh",
    "Dadra and Nagar Haveli and Daman and Diu",
    "Delhi",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jammu and Kashmir",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Ladakh",
    "Lakshadweep",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Puducherry",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
)

BORDER_STATES = frozenset({
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Gujarat",
    "Himachal Pradesh",
    "Jammu and Kashmir",
    "Ladakh",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
})

# Keys are lookup keys (see RegionNormalizer.lookup_key), not raw spellings.
STATE_ALIASES = {
    "andaman nicobar": "Andaman and Nicobar Islands",
    "andaman and nicobar": "Andaman and Nicobar Islands",
    "dadra nagar haveli": "Dadra and Nagar Haveli and Daman and Diu",
    "dadra and nagar haveli": "Dadra and Nagar Haveli and Daman and Diu",
    "daman diu": "Dadra and Nagar Haveli and Daman and Diu",
    "daman and diu": "Dadra and Nagar Haveli and Daman and Diu",
    "nct of delhi": "Delhi",
    "new delhi": "Delhi",
    "jammu kashmir": "Jammu and Kashmir",
    "j and k": "Jammu and Kashmir",
    "jammu kashmir union territory": "Jammu and Kashmir",
    "orissa": "Odisha",
    "lakshdweep": "Lakshadweep",
    "chhatisgarh": "Chhattisgarh",
    "chattisgarh": "Chhattisgarh",
    "telengana": "Telangana",
    "uttaranchal": "Uttarakhand",
    "pondicherry": "Puducherry",
    "tamilnadu": "Tamil Nadu",
    "rajastan": "Rajasthan",
    "westbengal": "West Bengal",
    "west bangal": "West Bengal",
}
