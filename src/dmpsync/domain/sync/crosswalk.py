"""ROR to Crossref Funder Registry crosswalk.

Harvesting sources index funders by their Crossref Funder id while records
usually carry ROR ids; both forms are needed to match funding references.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

_ROR_TO_FUNDREF: Final[dict[str, str]] = {
    # NIH
    "https://ror.org/01cwqze88": "https://doi.org/10.13039/100000002",
    "https://ror.org/04mhx6838": "https://doi.org/10.13039/100000055",
    "https://ror.org/012pb6c26": "https://doi.org/10.13039/100000050",
    "https://ror.org/03wkg3b53": "https://doi.org/10.13039/100000053",
    "https://ror.org/0060t0j89": "https://doi.org/10.13039/100000092",
    "https://ror.org/00372qc85": "https://doi.org/10.13039/100000070",
    "https://ror.org/00190t495": "https://doi.org/10.13039/100008460",
    "https://ror.org/00j4k1h63": "https://doi.org/10.13039/100000066",
    "https://ror.org/01y3zfr79": "https://doi.org/10.13039/100000056",
    "https://ror.org/04q48ey07": "https://doi.org/10.13039/100000057",
    "https://ror.org/0493hgw16": "https://doi.org/10.13039/100006545",
    "https://ror.org/04vfsmv21": "https://doi.org/10.13039/100000098",
    "https://ror.org/03jh5a977": "https://doi.org/10.13039/100000093",
    "https://ror.org/04xeg9z08": "https://doi.org/10.13039/100000025",
    "https://ror.org/01s5ya894": "https://doi.org/10.13039/100000065",
    "https://ror.org/02meqm098": "https://doi.org/10.13039/100000002",
    "https://ror.org/049v75w11": "https://doi.org/10.13039/100000049",
    "https://ror.org/004a2wv92": "https://doi.org/10.13039/100000072",
    "https://ror.org/00adh9b73": "https://doi.org/10.13039/100000062",
    "https://ror.org/043z4tv69": "https://doi.org/10.13039/100000060",
    "https://ror.org/00x19de83": "https://doi.org/10.13039/100000002",
    "https://ror.org/02jzrsm59": "https://doi.org/10.13039/100000027",
    "https://ror.org/006zn3t30": "https://doi.org/10.13039/100000069",
    "https://ror.org/04byxyr05": "https://doi.org/10.13039/100000071",
    "https://ror.org/04pw6fb54": "https://doi.org/10.13039/100006108",
    "https://ror.org/05aq6yn88": "https://doi.org/10.13039/100006955",
    "https://ror.org/02xey9a22": "https://doi.org/10.13039/100000061",
    "https://ror.org/00fj8a872": "https://doi.org/10.13039/100000052",
    "https://ror.org/01wtjyf13": "https://doi.org/10.13039/100000063",
    "https://ror.org/04r5s4b52": "https://doi.org/10.13039/100005440",
    "https://ror.org/046zezr58": "https://doi.org/10.13039/100006085",
    "https://ror.org/02e3wq066": "https://doi.org/10.13039/100006086",
    "https://ror.org/031gy6182": "https://doi.org/10.13039/100000002",
    "https://ror.org/054j5yq82": "https://doi.org/10.13039/100000002",
    "https://ror.org/02yrzyf97": "https://doi.org/10.13039/100000002",

    # NSF
    "https://ror.org/021nxhr62": "https://doi.org/10.13039/100000001",
    "https://ror.org/04aqat463": "https://doi.org/10.13039/100000001",
    "https://ror.org/01rcfpa16": "https://doi.org/10.13039/100005441",
    "https://ror.org/014eweh95": "https://doi.org/10.13039/100005445",
    "https://ror.org/001xhss06": "https://doi.org/10.13039/100000076",
    "https://ror.org/04qn9mx93": "https://doi.org/10.13039/100000153",
    "https://ror.org/03g87he71": "https://doi.org/10.13039/100000155",
    "https://ror.org/01tnvpc68": "https://doi.org/10.13039/100000156",
    "https://ror.org/01rvays47": "https://doi.org/10.13039/100000154",
    "https://ror.org/002jdaq33": "https://doi.org/10.13039/100000152",
    "https://ror.org/025kzpk63": "https://doi.org/10.13039/100000083",
    "https://ror.org/04nh1dc89": "https://doi.org/10.13039/100007523",
    "https://ror.org/01mng8331": "https://doi.org/10.13039/100000143",
    "https://ror.org/02rdzmk74": "https://doi.org/10.13039/100000144",
    "https://ror.org/053a2cp42": "https://doi.org/10.13039/100000145",
    "https://ror.org/014bj5w56": "https://doi.org/10.13039/100000081",
    "https://ror.org/00whkrf32": "https://doi.org/10.13039/100000082",
    "https://ror.org/05s7cqk18": "https://doi.org/10.13039/100000173",
    "https://ror.org/02kd4km72": "https://doi.org/10.13039/100000172",
    "https://ror.org/03mamvh39": "https://doi.org/10.13039/100000171",
    "https://ror.org/00b6sbb32": "https://doi.org/10.13039/100000084",
    "https://ror.org/0471zv972": "https://doi.org/10.13039/100000146",
    "https://ror.org/028yd4c30": "https://doi.org/10.13039/100000147",
    "https://ror.org/01krpsy48": "https://doi.org/10.13039/100000148",
    "https://ror.org/050rnw378": "https://doi.org/10.13039/100000149",
    "https://ror.org/0388pet74": "https://doi.org/10.13039/100000150",
    "https://ror.org/03xyg3m20": "https://doi.org/10.13039/100000151",
    "https://ror.org/05p847d66": "https://doi.org/10.13039/100000085",
    "https://ror.org/037gd6g64": "https://doi.org/10.13039/100000159",
    "https://ror.org/05v01mk25": "https://doi.org/10.13039/100000160",
    "https://ror.org/05wqqhv83": "https://doi.org/10.13039/100000141",
    "https://ror.org/05nwjp114": "https://doi.org/10.13039/100007352",
    "https://ror.org/05fnzca26": "https://doi.org/10.13039/100000162",
    "https://ror.org/02trddg58": "https://doi.org/10.13039/100000163",
    "https://ror.org/029b7h395": "https://doi.org/10.13039/100000086",
    "https://ror.org/04mg8wm74": "https://doi.org/10.13039/100000164",
    "https://ror.org/01ar8dr59": "https://doi.org/10.13039/100000165",
    "https://ror.org/01pc7k308": "https://doi.org/10.13039/100000078",
    "https://ror.org/051fftw81": "https://doi.org/10.13039/100000121",
    "https://ror.org/04ap5x931": "https://doi.org/10.13039/100000166",
    "https://ror.org/00apvva27": "https://doi.org/10.13039/100005716",
    "https://ror.org/04nseet23": "https://doi.org/10.13039/100000179",
    "https://ror.org/04k9mqs78": "https://doi.org/10.13039/100000106",
    "https://ror.org/01k638r21": "https://doi.org/10.13039/100000089",
    "https://ror.org/01gmp5538": "https://doi.org/10.13039/100005447",
    "https://ror.org/01vnjbg30": "https://doi.org/10.13039/100005449",
    "https://ror.org/03h7mcc28": "https://doi.org/10.13039/100000088",
    "https://ror.org/05wgkzg12": "https://doi.org/10.13039/100000169",
    "https://ror.org/0445wmv88": "https://doi.org/10.13039/100000170",
    "https://ror.org/02dz2hb46": "https://doi.org/10.13039/100000077",
    "https://ror.org/034m1ez10": "https://doi.org/10.13039/100000107",
    "https://ror.org/02a65dj82": "https://doi.org/10.13039/100005717",
    "https://ror.org/020fhsn68": "https://doi.org/10.13039/100000001",
    "https://ror.org/03z9hh605": "https://doi.org/10.13039/100000174",
    "https://ror.org/04ya3kq71": "https://doi.org/10.13039/100007521",
    "https://ror.org/04evh7y43": "https://doi.org/10.13039/100005443",
    "https://ror.org/04h67aa53": "https://doi.org/10.13039/100000177",
    "https://ror.org/025dabr11": "https://doi.org/10.13039/100005446",
    "https://ror.org/04vw0kz07": "https://doi.org/10.13039/100005448",
    "https://ror.org/054ydxh33": "https://doi.org/10.13039/100005554",
    "https://ror.org/01sharn77": "https://doi.org/10.13039/100006091",
    "https://ror.org/02ch5q898": "https://doi.org/10.13039/100000001",

    # NASA
    "https://ror.org/0171mag52": "https://doi.org/10.13039/100006198",
    "https://ror.org/027k65916": "https://doi.org/10.13039/100006196",
    "https://ror.org/027ka1x80": "https://doi.org/10.13039/100000104",
    "https://ror.org/02acart68": "https://doi.org/10.13039/100006195",
    "https://ror.org/059fqnc42": "https://doi.org/10.13039/100006193",
    "https://ror.org/01cyfxe35": "https://doi.org/10.13039/100016595",
    "https://ror.org/04xx4z452": "https://doi.org/10.13039/100006203",
    "https://ror.org/0399mhs52": "https://doi.org/10.13039/100006199",
    "https://ror.org/02epydz83": "https://doi.org/10.13039/100006197",
    "https://ror.org/03j9e2j92": "https://doi.org/10.13039/100006205",
    "https://ror.org/02s42x260": "https://doi.org/10.13039/100000104",
    "https://ror.org/01p7gwa14": "https://doi.org/10.13039/100000104",
    "https://ror.org/01qxmdg18": "https://doi.org/10.13039/100000104",
    "https://ror.org/006ndaj41": "https://doi.org/10.13039/100000104",
    "https://ror.org/03em45j53": "https://doi.org/10.13039/100007346",
    "https://ror.org/045t78n53": "https://doi.org/10.13039/100000104",
    "https://ror.org/00r57r863": "https://doi.org/10.13039/100000104",
    "https://ror.org/0401vze59": "https://doi.org/10.13039/100007726",
    "https://ror.org/04hccab49": "https://doi.org/10.13039/100000104",
    "https://ror.org/04437j066": "https://doi.org/10.13039/100000104",
    "https://ror.org/028b18z22": "https://doi.org/10.13039/100000104",
    "https://ror.org/00ryjtt64": "https://doi.org/10.13039/100000104",

    # DOE
    "https://ror.org/01bj3aw27": "https://doi.org/10.13039/100000015",
    "https://ror.org/03q1rgc19": "https://doi.org/10.13039/100006133",
    "https://ror.org/02xznz413": "https://doi.org/10.13039/100006134",
    "https://ror.org/03sk1we31": "https://doi.org/10.13039/100006168",
    "https://ror.org/00f93gc02": "https://doi.org/10.13039/100006177",
    "https://ror.org/05tj7dm33": "https://doi.org/10.13039/100006147",
    "https://ror.org/0012c7r22": "https://doi.org/10.13039/100006192",
    "https://ror.org/00mmn6b08": "https://doi.org/10.13039/100006132",
    "https://ror.org/03ery9d53": "https://doi.org/10.13039/100006120",
    "https://ror.org/033jmdj81": "https://doi.org/10.13039/100000015",
    "https://ror.org/03rd4h240": "https://doi.org/10.13039/100006130",
    "https://ror.org/0054t4769": "https://doi.org/10.13039/100006200",
    "https://ror.org/03eecgp81": "https://doi.org/10.13039/100006174",
    "https://ror.org/00heb4d89": "https://doi.org/10.13039/100006135",
    "https://ror.org/05ek3m339": "https://doi.org/10.13039/100006150",
    "https://ror.org/00km40770": "https://doi.org/10.13039/100006138",
    "https://ror.org/02ah1da87": "https://doi.org/10.13039/100006137",
    "https://ror.org/05hsv7e61": "https://doi.org/10.13039/100000015",
    "https://ror.org/01c9ay627": "https://doi.org/10.13039/100006165",
    "https://ror.org/04z2gev20": "https://doi.org/10.13039/100006183",
    "https://ror.org/02z1qvq09": "https://doi.org/10.13039/100006144",
    "https://ror.org/03jf3w726": "https://doi.org/10.13039/100006186",
    "https://ror.org/04848jz84": "https://doi.org/10.13039/100006142",
    "https://ror.org/04s778r16": "https://doi.org/10.13039/100006171",
    "https://ror.org/04nnxen11": "https://doi.org/10.13039/100000015",
    "https://ror.org/05csy5p27": "https://doi.org/10.13039/100010268",
    "https://ror.org/05efnac71": "https://doi.org/10.13039/100000015",
}

ROR_TO_FUNDREF: Final = MappingProxyType(_ROR_TO_FUNDREF)


def fundref_for(ror_id: str | None) -> str | None:
    """Return the Crossref Funder id equivalent to ``ror_id`` (if known)."""

    if not ror_id:
        return None
    return ROR_TO_FUNDREF.get(ror_id.strip().lower().rstrip("/"))
